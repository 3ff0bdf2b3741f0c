from mfg_dashboard.database import SessionLocal
from mfg_dashboard.models.material import Material, MaterialAllocation
from mfg_dashboard.models.production_order import ProductionOrder, OrderMaterialLine
from mfg_dashboard.models.project import Project
from mfg_dashboard.utils.project import apply_derived_status
from mfg_dashboard.utils.project_status import current_date


def seed_demo_data(db=None):
    """Insert a demo project with orders and stock. Existing rows are left alone."""
    own_session = db is None
    if own_session:
        db = SessionLocal()

    try:
        # --- Materials ---
        materials = [
            # (id, name, unit, available, safety, lead time days)
            ("ALU-SHEET", "Aluminium sheet 4x8", "sheet", 40.0, 10.0, 14),
            ("STEEL-TUBE", "Steel tube 2in", "ft", 300.0, 50.0, 10),
            ("WIRE-12AWG", "Wire 12 AWG", "ft", 500.0, 100.0, 5),
            ("VINYL-WRAP", "Vinyl wrap roll", "roll", 2.0, 1.0, 21),
        ]
        for material_id, name, unit, available, safety, lead_time in materials:
            if not db.query(Material).filter_by(id=material_id).first():
                db.add(Material(
                    id=material_id,
                    name=name,
                    unit=unit,
                    available_stock=available,
                    safety_stock=safety,
                    lead_time=lead_time,
                ))

        # --- Project ---
        project = db.query(Project).filter_by(project_number="DEMO-001").first()
        if not project:
            project = Project(
                project_number="DEMO-001",
                name="Mobile command vehicle",
                location="Bay 3",
                fabrication_start="2025-01-06",
                assembly_start="2025-02-03",
                wrap_graphics="2025-03-10",
                ntc_testing="2025-03-24",
                qc_start="2025-04-07",
                ship="2025-04-21",
                status="NOT_STARTED",
                manual_status=False,
            )
            apply_derived_status(project, current_date())
            db.add(project)
            db.flush()

        # --- Production orders ---
        orders = [
            ("PO-1001", "Body shell", [("ALU-SHEET", 24.0), ("STEEL-TUBE", 180.0)]),
            ("PO-1002", "Interior fit-out", [("ALU-SHEET", 22.0), ("WIRE-12AWG", 650.0)]),
            ("PO-1003", "Exterior graphics", [("VINYL-WRAP", 4.0)]),
        ]
        for order_number, product_name, lines in orders:
            if db.query(ProductionOrder).filter_by(order_number=order_number).first():
                continue
            order = ProductionOrder(
                order_number=order_number,
                product_name=product_name,
                project_id=project.id,
                production_line_id="LINE-A",
            )
            order.materials = [
                OrderMaterialLine(material_id=material_id, required_quantity=quantity)
                for material_id, quantity in lines
            ]
            db.add(order)

        if not db.query(MaterialAllocation).filter_by(project_id=project.id).first():
            db.add(MaterialAllocation(
                material_id="ALU-SHEET",
                quantity=20.0,
                project_id=project.id,
                production_line_id="LINE-A",
                status="allocated",
            ))

        db.commit()
    finally:
        if own_session:
            db.close()

    return {"message": "Demo data seeded successfully."}
