from sqlalchemy import MetaData, create_engine

from content_engine.core.config import settings

# Connect to the configured database
engine = create_engine(settings.DATABASE_URL, future=True)
meta = MetaData()

# Load metadata of all tables
meta.reflect(bind=engine)

if __name__ == "__main__":
    # Iterate over all tables and their columns
    for table_name, table in meta.tables.items():
        print(f"Table: {table_name}")
        print("Columns:", [col.name for col in table.columns])
        print()
