import argparse
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select

from organic_trace.core.logging import setup_logging
from organic_trace.database import Base, SessionLocal, engine
from organic_trace.models import (
    EntryProduct,
    ExitProduct,
    Product,
    Profile,
    SupplyChainEvent,
    UsedToday,
    UserRole,
)

FARMER_ID = "00000000-0000-4000-8000-000000000001"
DISTRIBUTOR_ID = "00000000-0000-4000-8000-000000000002"
RETAILER_ID = "00000000-0000-4000-8000-000000000003"


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample traceability data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if args.reset:
            for model in (SupplyChainEvent, UsedToday, ExitProduct, EntryProduct, Product, UserRole, Profile):
                db.execute(delete(model))
            db.commit()

        has_profile = db.execute(select(Profile.id).limit(1)).first()
        if has_profile:
            print("Seed skipped: profiles already exist.")
            return

        db.add_all(
            [
                Profile(id=FARMER_ID, full_name="Green Valley Farm", address="Mandya, Karnataka"),
                Profile(id=DISTRIBUTOR_ID, full_name="Fresh Route Distributors"),
                Profile(id=RETAILER_ID, full_name="Organic Corner Store", phone="+91 80 5550 1234"),
                UserRole(user_id=FARMER_ID, role="farmer"),
                UserRole(user_id=DISTRIBUTOR_ID, role="distributor"),
                UserRole(user_id=RETAILER_ID, role="retailer"),
            ]
        )

        ragi = Product(
            name="Organic Ragi",
            description="Finger millet, stone-ground",
            category="Grains",
            unit="kg",
            origin="Mandya, Karnataka",
            certification="India Organic",
            created_by=FARMER_ID,
        )
        tomatoes = Product(
            name="Organic Tomatoes",
            category="Vegetables",
            unit="kg",
            origin="Kolar, Karnataka",
            certification="PGS-India",
            created_by=FARMER_ID,
        )
        db.add_all([ragi, tomatoes])
        db.flush()

        now = datetime.now(timezone.utc)
        harvest = EntryProduct(
            user_id=FARMER_ID,
            product_id=ragi.id,
            quantity=500.0,
            batch_number="BATCH-001",
            notes="Harvest lot",
        )
        received = EntryProduct(
            user_id=DISTRIBUTOR_ID,
            product_id=ragi.id,
            quantity=200.0,
            batch_number="BATCH-001",
            received_from=FARMER_ID,
        )
        db.add_all([harvest, received])
        db.flush()

        shipped = ExitProduct(
            user_id=FARMER_ID,
            entry_product_id=harvest.id,
            quantity=200.0,
            assigned_to=DISTRIBUTOR_ID,
        )
        db.add(shipped)
        db.add(UsedToday(user_id=RETAILER_ID, entry_product_id=received.id, quantity=5.0))

        db.add_all(
            [
                SupplyChainEvent(
                    product_id=ragi.id,
                    batch_number="BATCH-001",
                    event_type="entry",
                    to_user=FARMER_ID,
                    quantity=500.0,
                    location="Mandya",
                    timestamp=now - timedelta(days=3),
                ),
                SupplyChainEvent(
                    product_id=ragi.id,
                    batch_number="BATCH-001",
                    event_type="exit",
                    from_user=FARMER_ID,
                    to_user=DISTRIBUTOR_ID,
                    quantity=200.0,
                    timestamp=now - timedelta(days=2),
                ),
                SupplyChainEvent(
                    product_id=ragi.id,
                    batch_number="BATCH-001",
                    event_type="entry",
                    from_user=FARMER_ID,
                    to_user=DISTRIBUTOR_ID,
                    quantity=200.0,
                    location="Bengaluru",
                    timestamp=now - timedelta(days=1),
                ),
            ]
        )
        db.commit()
        print("Seed data created.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
