"""
Shared fixtures: an in-memory database per test and a FastAPI test client bound to it.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mfg_dashboard.database import Base, get_db
from mfg_dashboard.main import app
from mfg_dashboard.schemas import MaterialStock, OrderMaterialLine, OrderMaterials, ProjectStatusInput


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def test_client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def milestone_project():
    """Project with fabrication, assembly and ship dates only."""
    return ProjectStatusInput(
        fabrication_start="2025-01-01",
        assembly_start="2025-01-10",
        ship="2025-02-01",
    )


@pytest.fixture
def full_schedule_project():
    """Project with all six milestones in production order."""
    return ProjectStatusInput(
        fabrication_start="2025-01-01",
        assembly_start="2025-01-10",
        wrap_graphics="2025-01-20",
        ntc_testing="2025-02-01",
        qc_start="2025-02-10",
        ship="2025-02-20",
    )


@pytest.fixture
def make_order():
    """Build an order from (material_id, quantity) pairs."""
    def _make_order(*lines):
        return OrderMaterials(
            materials=[OrderMaterialLine(material_id=m, required_quantity=q) for m, q in lines]
        )
    return _make_order


@pytest.fixture
def sample_materials():
    return [
        MaterialStock(id="M1", available_stock=8, safety_stock=2, lead_time=7),
        MaterialStock(id="M2", available_stock=100, safety_stock=10, lead_time=3),
        MaterialStock(id="M3", available_stock=5, safety_stock=4, lead_time=14),
    ]
