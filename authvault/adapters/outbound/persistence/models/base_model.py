# authvault/adapters/outbound/persistence/models/base_model.py

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import declarative_base

# Parent class of every ORM model, holds the shared metadata
Base = declarative_base()

# SQLite only autoincrements INTEGER primary keys
BigIntegerPK = BigInteger().with_variant(Integer, "sqlite")
