from lms.schemas.PyObjectId import PyObjectId

__all__ = ["PyObjectId"]
