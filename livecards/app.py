"""
livecards - FastAPI Server
Serves a portfolio page decorated with live GitHub repository stats
"""
import logging
from contextlib import asynccontextmanager
from html import escape

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from livecards.router import IntegrationScheduler
from livecards.schemas.inputs import IntegrationConfig, load_config
from livecards.tools.cache import TTLCache
from livecards.tools.github import GitHubClient
from livecards.tools.page import PageDocument

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


def default_page(config: IntegrationConfig) -> str:
    """Minimal portfolio page with one card per tracked project"""
    username = escape(config.username)
    cards = "\n".join(
        f"""
        <div class="card">
            <h3>{escape(name)}</h3>
            <a href="https://github.com/{username}/{escape(name)}" target="_blank" rel="noopener">View on GitHub</a>
            <div class="badges"></div>
        </div>"""
        for name in config.projects
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{username} - Projects</title>
    <style>
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif; background: #0a0a0a; color: #ffffff; }}
        .card {{ background: #141414; border: 1px solid #2a2a2a; border-radius: 16px; padding: 24px; margin: 16px auto; max-width: 720px; }}
        .card a {{ color: #00d4ff; }}
        .stats-row {{ display: flex; gap: 16px; margin-top: 12px; color: #a0a0a0; }}
        .release-info {{ margin-top: 8px; color: #6b6b6b; }}
        .site-footer {{ text-align: center; color: #6b6b6b; padding: 32px; }}
    </style>
</head>
<body>
    <main>{cards}
    </main>
    <footer class="site-footer">
        <p>&copy; {username}</p>
    </footer>
</body>
</html>
"""


def build_scheduler(config: IntegrationConfig) -> IntegrationScheduler:
    """Wire cache, client and page together for one process"""
    if config.page_path:
        page = PageDocument.from_file(config.page_path)
    else:
        page = PageDocument(default_page(config))

    client = GitHubClient(
        username=config.username,
        cache=TTLCache(ttl_seconds=config.cache_ttl_seconds),
        token=config.token,
        api_base=config.api_base
    )
    return IntegrationScheduler(client, page, config)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = load_config()
    scheduler = build_scheduler(config)
    app.state.scheduler = scheduler
    scheduler.start()
    try:
        yield
    finally:
        await scheduler.stop()
        await scheduler.client.close()


app = FastAPI(
    title="livecards",
    description="Portfolio project cards with live GitHub stats",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware so the static site can query the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_scheduler(request: Request) -> IntegrationScheduler:
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        raise HTTPException(status_code=503, detail="Integration not started")
    return scheduler


@app.get("/healthz")
async def health_check(request: Request):
    """Health check endpoint"""
    scheduler = get_scheduler(request)
    return {
        "status": "healthy",
        "service": "livecards",
        "username": scheduler.config.username,
        "scheduled": scheduler.is_scheduled,
        "cached_entries": len(scheduler.client.cache)
    }


@app.get("/status")
async def status_endpoint(request: Request):
    """
    Progress log of the update cycles plus the last cycle report
    """
    scheduler = get_scheduler(request)
    progress = scheduler.get_progress()
    progress["last_report"] = scheduler.last_report.model_dump() if scheduler.last_report else None
    return progress


@app.get("/api/projects")
async def projects_endpoint(request: Request):
    """
    Stats and latest release per tracked project from the last cycle
    """
    scheduler = get_scheduler(request)
    report = scheduler.last_report
    if report is None:
        return {"username": scheduler.config.username, "count": 0, "projects": []}
    return {
        "username": scheduler.config.username,
        "count": len(report.projects),
        "projects": [p.model_dump() for p in report.projects]
    }


@app.get("/api/profile")
async def profile_endpoint(request: Request):
    """Owner's GitHub profile (cached like every other call)"""
    scheduler = get_scheduler(request)
    profile = await scheduler.client.get_user_profile()
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile unavailable")
    return profile.model_dump()


@app.post("/refresh")
async def refresh_endpoint(request: Request):
    """Run one update cycle now"""
    scheduler = get_scheduler(request)
    report = await scheduler.tick()
    return report.model_dump()


@app.get("/", response_class=HTMLResponse)
async def root(request: Request):
    """
    The decorated page
    """
    scheduler = get_scheduler(request)
    return HTMLResponse(content=scheduler.page.render())


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host="0.0.0.0", port=8000)
