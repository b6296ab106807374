"""Public gallery and admin dashboard endpoints."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from photo_gallery.api.auth import get_container, require_admin
from photo_gallery.api.serializers import serialize_category_gallery, serialize_stats

router = APIRouter(tags=["gallery"])


@router.get("/api/gallery")
async def gallery(request: Request) -> list[dict[str, object]]:
    """Return every category with its photos."""
    container = get_container(request)
    return [
        serialize_category_gallery(entry)
        for entry in container.gallery_service.get_gallery()
    ]


@router.get("/api/admin/stats", dependencies=[Depends(require_admin)])
async def admin_stats(request: Request) -> dict[str, object]:
    """Return totals and recent items for the admin dashboard."""
    container = get_container(request)
    return serialize_stats(container.gallery_service.get_dashboard_stats())


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def gallery_ui() -> HTMLResponse:
    """Minimal public gallery page that consumes the gallery API."""
    return HTMLResponse(_GALLERY_UI_HTML)


_GALLERY_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Photo Gallery</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      nav button { padding: 0.4rem 0.8rem; margin: 0 0.5rem 0.5rem 0; }
      nav button.active { font-weight: bold; }
      .grid { display: grid; gap: 1rem;
              grid-template-columns: repeat(auto-fill, minmax(200px, 1fr)); }
      figure { margin: 0; }
      img { width: 100%; height: 200px; object-fit: cover; border-radius: 4px; }
      figcaption { font-size: 0.9rem; margin-top: 0.3rem; }
    </style>
  </head>
  <body>
    <h1>Gallery</h1>
    <nav id="categories"></nav>
    <section id="photos" class="grid">Loading...</section>
    <script>
      let gallery = [];
      function render(categoryId) {
        const nav = document.getElementById('categories');
        nav.innerHTML = '';
        const all = document.createElement('button');
        all.textContent = 'All';
        all.className = categoryId === null ? 'active' : '';
        all.onclick = () => render(null);
        nav.appendChild(all);
        for (const entry of gallery) {
          const button = document.createElement('button');
          button.textContent = entry.category.name;
          button.className = entry.category.id === categoryId ? 'active' : '';
          button.onclick = () => render(entry.category.id);
          nav.appendChild(button);
        }
        const section = document.getElementById('photos');
        section.innerHTML = '';
        const photos = gallery
          .filter((entry) => categoryId === null || entry.category.id === categoryId)
          .flatMap((entry) => categoryId === null ? entry.photos.slice(0, 8) : entry.photos);
        if (!photos.length) {
          section.textContent = 'No photos yet.';
          return;
        }
        for (const photo of photos) {
          const figure = document.createElement('figure');
          const img = document.createElement('img');
          img.src = photo.imageUrl;
          img.alt = photo.title;
          const caption = document.createElement('figcaption');
          caption.textContent = photo.title;
          figure.append(img, caption);
          if (photo.externalLink) {
            figure.onclick = () => window.open(photo.externalLink, '_blank');
          }
          section.appendChild(figure);
        }
      }
      fetch('/api/gallery')
        .then((res) => res.json())
        .then((data) => { gallery = data; render(null); })
        .catch(() => {
          document.getElementById('photos').textContent = 'Failed to load gallery.';
        });
    </script>
  </body>
</html>
"""
