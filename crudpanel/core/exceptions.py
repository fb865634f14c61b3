"""
Core Exceptions

Custom exceptions for crudpanel.
"""


class WidgetValidationError(Exception):
    """
    Raised when request input does not satisfy the widgets' validation rules.

    Carries the failures grouped per field, each message already localized:

        {"email": ["Email is required."], "name": ["Name may not be greater than 20."]}

    Usage:
        try:
            definition.validate(request, "create")
        except WidgetValidationError as e:
            return JSONResponse({"errors": e.errors}, status_code=422)
    """

    def __init__(self, errors: dict[str, list[str]], message: str = "The given data was invalid"):
        self.errors = errors
        self.message = message
        super().__init__(self.message)
