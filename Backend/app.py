from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Dict, List

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
env_path = BASE_DIR / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Add parent directory to path for package imports
sys.path.insert(0, str(BASE_DIR))
from catalog import Article, ArticleStore, CatalogError
from rendering import (
    DocumentRenderer,
    render_article_html,
    render_home,
    render_not_found,
    render_page,
    render_search_results,
)
from seo import (
    PageHead,
    SEOData,
    generate_article_seo,
    generate_home_seo,
    generate_search_seo,
    generate_sitemap,
    robots_txt,
    sitemap_xml,
)

# Configure logging
logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"
DEFAULT_PORT = int(os.environ.get("PORT", "8800"))

# Configuration
CATALOG_PATH = Path(os.environ.get("CATALOG_PATH", str(BASE_DIR / "data" / "articles")))
SITE_BASE_URL = os.environ.get("SITE_BASE_URL", "").rstrip("/")
SITE_NAME = os.environ.get("SITE_NAME", "Wikipedia")
CATEGORY_BASE_URL = os.environ.get("CATEGORY_BASE_URL", "https://en.wikipedia.org/wiki/Category:")
MAIN_PAGE_ARTICLE = os.environ.get("MAIN_PAGE_ARTICLE", "wikipedia")


class ArticleSummary(BaseModel):
    id: str
    title: str
    summary: str
    last_modified: str = Field("", alias="lastModified")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_article(cls, article: Article) -> "ArticleSummary":
        return cls(
            id=article.id,
            title=article.title,
            summary=article.summary,
            last_modified=article.last_modified,
        )


def _summaries(articles: List[Article]) -> List[Dict[str, str]]:
    return [ArticleSummary.from_article(a).model_dump(by_alias=True) for a in articles]


def create_app(
    catalog_path: Path = CATALOG_PATH,
    base_url: str = SITE_BASE_URL,
    site_name: str = SITE_NAME,
    main_article_id: str = MAIN_PAGE_ARTICLE,
) -> FastAPI:
    """Build the web application around a loaded catalog.

    Args:
        catalog_path: Directory of article JSON files (or a single JSON file)
        base_url: Public origin used in canonical URLs; empty means "use the request's"
        site_name: Site name shown in titles and metadata
        main_article_id: Article shown as the main page when the catalog has it

    Returns:
        Configured FastAPI application

    Raises:
        SystemExit: If the catalog cannot be loaded
    """
    try:
        store = ArticleStore.from_path(catalog_path)
    except CatalogError as exc:
        raise SystemExit(f"Unable to load article catalog from '{catalog_path}': {exc}") from exc

    renderer = DocumentRenderer(store, category_base_url=CATEGORY_BASE_URL)
    logger.info(f"✓ Catalog loaded: {len(store)} articles from {catalog_path}")

    app = FastAPI(title=f"{site_name} Encyclopedia", version="1.0.0")
    app.state.store = store
    app.state.renderer = renderer

    # For production, set CORS_ORIGINS="https://yourdomain.com,https://app.yourdomain.com"
    cors_origins_str = os.environ.get("CORS_ORIGINS", "*")
    if cors_origins_str == "*":
        allowed_origins = ["*"]
    else:
        allowed_origins = [origin.strip() for origin in cors_origins_str.split(",") if origin.strip()]
        logger.info(f"CORS allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allowed_origins != ["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    def site_url(request: Request) -> str:
        return base_url or str(request.base_url).rstrip("/")

    def page(seo: SEOData, body_html: str, status_code: int = 200, query: str = "") -> HTMLResponse:
        head = PageHead(site_name=site_name).apply(seo)
        document = render_page(head.to_html(), body_html, store.get_all(), query=query)
        return HTMLResponse(document, status_code=status_code)

    @app.get("/", response_class=HTMLResponse)
    def read_root(request: Request) -> HTMLResponse:
        """Main page: the main article if the catalog has one, else featured articles."""
        main_article = store.get_by_id(main_article_id) if main_article_id else None
        if main_article is not None:
            body_html = render_article_html(renderer.render(main_article))
        else:
            body_html = render_home(site_name, store.get_all())
        return page(generate_home_seo(site_url(request), site_name), body_html)

    @app.get("/article/{article_id}", response_class=HTMLResponse)
    def read_article(article_id: str, request: Request) -> HTMLResponse:
        article = store.get_by_id(article_id)
        if article is None:
            logger.info(f"Article not found: {article_id}")
            seo = generate_home_seo(site_url(request), site_name)
            seo.title = f"Article Not Found - {site_name}"
            return page(seo, render_not_found(article_id, len(store)), status_code=404)

        seo = generate_article_seo(article, site_url(request), site_name)
        return page(seo, render_article_html(renderer.render(article)))

    @app.get("/search", response_class=HTMLResponse)
    def read_search(request: Request, q: str = "") -> HTMLResponse:
        results = store.search(q)
        seo = generate_search_seo(q, site_url(request), site_name)
        return page(seo, render_search_results(q, results), query=q)

    @app.get("/api/health")
    def health_check(request: Request) -> JSONResponse:
        url = site_url(request)
        return JSONResponse({
            "status": "ok",
            "articles": len(store),
            "sitemap": f"{url}/sitemap.xml",
            "robots": f"{url}/robots.txt",
        })

    @app.get("/api/articles")
    def list_articles() -> JSONResponse:
        """List all articles in catalog order."""
        return JSONResponse({"articles": _summaries(store.get_all())})

    @app.get("/api/articles/{article_id}")
    def get_article(article_id: str, request: Request) -> JSONResponse:
        """Get an article with its rendered tree and page metadata."""
        article = store.get_by_id(article_id)
        if article is None:
            raise HTTPException(status_code=404, detail=f"Article '{article_id}' not found.")

        return JSONResponse({
            "article": article.to_dict(),
            "rendered": renderer.render(article).to_dict(),
            "seo": generate_article_seo(article, site_url(request), site_name).to_dict(),
        })

    @app.get("/api/articles/{article_id}/related")
    def get_related(article_id: str) -> JSONResponse:
        if article_id not in store:
            raise HTTPException(status_code=404, detail=f"Article '{article_id}' not found.")
        return JSONResponse({"id": article_id, "related": _summaries(store.get_related(article_id))})

    @app.get("/api/search")
    def search_articles(q: str = "") -> JSONResponse:
        results = store.search(q)
        logger.debug(f"Search '{q[:100]}' matched {len(results)} articles")
        return JSONResponse({"query": q, "results": _summaries(results)})

    @app.get("/sitemap.xml")
    def read_sitemap(request: Request) -> Response:
        xml = sitemap_xml(generate_sitemap(store.get_all(), site_url(request)))
        return Response(content=xml, media_type="application/xml")

    @app.get("/robots.txt")
    def read_robots(request: Request) -> PlainTextResponse:
        return PlainTextResponse(robots_txt(site_url(request)))

    return app


def run_server(host: str = "0.0.0.0", port: int = DEFAULT_PORT, reload: bool = False) -> None:
    try:
        import uvicorn
    except ModuleNotFoundError as exc:  # pragma: no cover - runtime guard
        raise SystemExit(
            "Missing dependency 'uvicorn'. Install it with 'pip install uvicorn[standard]' and retry."
        ) from exc

    uvicorn.run(
        "app:app",
        app_dir=str(Path(__file__).resolve().parent),
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


app = create_app()


if __name__ == "__main__":
    run_server(port=DEFAULT_PORT, reload=False)
