from pymongo import MongoClient
from pymongo.errors import ConnectionFailure
import os
import certifi

from dotenv import load_dotenv

load_dotenv()

class MongoDB:
    client: MongoClient = None

    @classmethod
    def connect(cls, uri: str):
        if uri.startswith("mongodb+srv://") or "tls=true" in uri:
            cls.client = MongoClient(uri, tlsCAFile=certifi.where(), tz_aware=False)
        else:
            cls.client = MongoClient(uri, tz_aware=False)

    @classmethod
    def get_database(cls, db_name: str = None):
        if cls.client is None:
            raise RuntimeError("MongoDB client is not connected")
        return cls.client[db_name or os.getenv("DB_NAME", "lms")]

    @classmethod
    def close(cls):
        if cls.client is not None:
            cls.client.close()
            cls.client = None

    @classmethod
    def connection_status(cls):
        try:
            cls.client.admin.command('ping')
            return {"status": "connected", "db": os.getenv('DB_NAME', "lms")}
        except (ConnectionFailure, AttributeError):
            return {"status": "disconnected", "db": os.getenv('DB_NAME', "lms")}
