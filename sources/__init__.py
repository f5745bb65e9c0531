# Importing the package registers the built-in export schemas
from . import linkedin_export  # noqa: F401
