"""Static HTML documentation served at ``/``."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from digilaw import __version__
from digilaw.config import settings

router = APIRouter()

_PAGE = """\
<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>Digilaw API Documentation</title>
    <style>
      body {{ font-family: -apple-system, "Segoe UI", Roboto, sans-serif;
             max-width: 960px; margin: 40px auto; padding: 0 20px;
             line-height: 1.6; color: #333; background: #f8f9fa; }}
      code {{ background: #e9ecef; padding: 2px 6px; border-radius: 4px; }}
      .endpoint {{ margin: 24px 0; padding: 18px; background: white;
                  border: 1px solid #dee2e6; border-radius: 8px; }}
      .endpoint h3 {{ margin-top: 0; color: #2c5282; }}
      .method {{ color: #38a169; font-weight: bold; }}
      footer {{ margin-top: 40px; text-align: center; color: #666; }}
    </style>
  </head>
  <body>
    <h1>Digilaw API Documentation</h1>
    <p>Extracts text from the latest Moroccan Bulletin Officiel PDF.</p>

    <div class="endpoint">
      <h3>Extract text from a specific page</h3>
      <p><span class="method">GET</span> <code>/api/Digilaw/Page</code></p>
      <p>Parameters: <code>page</code>, page number to extract (required).</p>
      <p>Example: <a href="/api/Digilaw/Page?page=1">/api/Digilaw/Page?page=1</a></p>
    </div>

    <div class="endpoint">
      <h3>Extract companies data</h3>
      <p><span class="method">GET</span> <code>/api/Digilaw/Companies</code></p>
      <p>Fetches the latest bulletin and returns the text of its first {max_pages} pages.</p>
      <p>Example: <a href="/api/Digilaw/Companies">/api/Digilaw/Companies</a></p>
    </div>

    <div class="endpoint">
      <h3>Health check</h3>
      <p><span class="method">GET</span> <code>/api/Digilaw/health</code></p>
      <p>Example: <a href="/api/Digilaw/health">/api/Digilaw/health</a></p>
    </div>

    <footer>Version {version} &middot; &copy; {year} Digilaw API</footer>
  </body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def documentation() -> str:
    return _PAGE.format(
        max_pages=settings.companies_max_pages,
        version=__version__,
        year=date.today().year,
    )
