"""
Initialize the local database: creates all tables.
Only needed for STORAGE_BACKEND=sql; the hosted backend owns its own schema.
Usage: python scripts/setup/init_db.py [--operator ID NAME]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import argparse
from app.database import create_tables, engine, SessionLocal
from app.config import settings
from app.models.operator import Operator
from sqlalchemy import inspect, text


def main():
    parser = argparse.ArgumentParser(description="Create tables and optionally seed an operator")
    parser.add_argument("--operator", nargs=2, metavar=("ID", "NAME"), help="Seed one gatehouse operator")
    args = parser.parse_args()

    print("🗄️  Lorry Bay DB Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running, or point DATABASE_URL at sqlite:///./yard.db")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = sorted(inspect(engine).get_table_names())
    print(f"✅ Tables ready ({len(tables)} total):")
    for t in tables:
        print(f"   ✓ {t}")

    if args.operator:
        op_id, name = args.operator
        db = SessionLocal()
        try:
            if db.get(Operator, op_id) is None:
                db.add(Operator(id=op_id, name=name))
                db.commit()
                print(f"\n👷 Operator seeded: {op_id} ({name})")
            else:
                print(f"\n👷 Operator {op_id} already exists")
        finally:
            db.close()

    print("\n🎉 Database ready! You can now start the backend:")
    print("   uvicorn app.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
