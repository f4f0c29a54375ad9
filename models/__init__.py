from models.teacher import Teacher
from models.course import Course
from models.resource import Resource
from models.catalog import Catalog, CatalogCheckReport

__all__ = [
    "Teacher",
    "Course",
    "Resource",
    "Catalog",
    "CatalogCheckReport",
]
