"""Database seeding script."""

from datetime import datetime, timezone

from inventory_console.database import SessionLocal
from inventory_console.models.asset import Asset
from inventory_console.models.equipment import Equipment
from inventory_console.models.log import Log
from inventory_console.models.user import User
from inventory_console.schemas.asset import default_asset_timestamp


def seed_database():
    """Seed database with demo records."""
    db = SessionLocal()

    try:
        # Check if demo data already exists
        existing_user = db.query(User).filter_by(email="admin@example.com").first()

        if existing_user:
            print("Database already seeded. Skipping.")
            return

        admin = User(name="Demo Admin", email="admin@example.com", role="admin")
        staff = User(name="Demo Staff", email="staff@example.com", role="staff")
        db.add_all([admin, staff])
        db.flush()  # Get the user IDs

        print(f"Created users: {admin.name} (ID: {admin.id}), {staff.name} (ID: {staff.id})")

        camera = Equipment(
            name="Studio Camera",
            type="Camera",
            brand="Canon",
            model="EOS R6",
            serial_number="CR6-0001",
            status="available",
        )
        light = Equipment(
            name="Key Light",
            type="Lighting",
            brand="Aputure",
            model="300d",
            status="maintenance",
            notes="Fan noise under load",
        )
        db.add_all([camera, light])
        db.flush()
        print(f"Created equipment: {camera.name}, {light.name}")

        db.add(
            Log(
                user_id=staff.id,
                action="Checked out for interview shoot",
                equipment_id=camera.id,
                timestamp=datetime.now(timezone.utc).replace(tzinfo=None, second=0, microsecond=0),
            )
        )
        print("Created log entry")

        assets = [
            Asset(asset_tag="A-0001", name="Tripod", category="studio equipment", condition="Good", qty=4),
            Asset(asset_tag="A-0002", name="Office Chair", category="furnitures", condition="Worn", qty=10),
            Asset(asset_tag="A-0003", name="Coffee Maker", category="pantry supplies", qty=1),
        ]
        for asset in assets:
            asset.created_at = default_asset_timestamp()
            db.add(asset)
            print(f"Created asset: {asset.asset_tag} ({asset.name})")

        db.commit()
        print("\nDatabase seeded successfully!")

    except Exception as e:
        db.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    print("Starting database seeding...")
    seed_database()
