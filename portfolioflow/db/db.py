import os
from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from portfolioflow.db.dbmodels import Base

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./portfolio.db")

# SQLite connections are shared with FastAPI's threadpool
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith(
    "sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create any missing tables."""
    Base.metadata.create_all(bind=SessionLocal.kw["bind"])
    print(f"✅ Database ready ({DATABASE_URL})")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
