import logging
from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.middleware.cors import CORSMiddleware
from mfg_dashboard.core.config import settings
from mfg_dashboard.database import engine, Base
from mfg_dashboard.models import *

from mfg_dashboard.routers import project, production_orders, materials, requirements

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(project.router, prefix="/manufacturing", tags=["Projects"])
app.include_router(production_orders.router, prefix="/manufacturing", tags=["Production Orders"])
app.include_router(requirements.router, prefix="/manufacturing/mrp", tags=["MRP"])
app.include_router(materials.router, prefix="/material", tags=["Materials"])


@app.on_event("startup")
def create_tables():
    logger.info("Creating database tables if not exist...")
    Base.metadata.create_all(bind=engine)

    if settings.seed_demo_data:
        from mfg_dashboard.seed.seed_demo import seed_demo_data
        try:
            seed_demo_data()
            logger.info("Demo data seeded.")
        except Exception as e:
            logger.warning("Could not seed demo data: %s", e)

    logger.info("Database ready.")


@app.get("/", response_class=HTMLResponse)
def root():
    return f"""
    <html>
        <head>
            <title>{settings.app_name}</title>
            <style>
                body {{
                    font-family: Arial, sans-serif;
                    background-color: #f9f9f9;
                    display: flex;
                    height: 100vh;
                    justify-content: center;
                    align-items: center;
                }}
                h1 {{
                    color: #2c3e50;
                    font-size: 3em;
                    text-align: center;
                }}
            </style>
        </head>
        <body>
            <h1>{settings.app_name} is running!</h1>
        </body>
    </html>
    """


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("mfg_dashboard.main:app", host="127.0.0.1", port=8000, reload=settings.environment == "development")
