# Services - pipelines over widgets and menus
from crudpanel.services.crud_definition import CrudDefinition
from crudpanel.services.menu import build_menu
from crudpanel.services.validation import build_validation_model, validate_input

__all__ = [
    "CrudDefinition",
    "build_menu",
    "build_validation_model",
    "validate_input",
]
