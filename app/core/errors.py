from typing import List, Union


class CatalogError(Exception):
    """Error base del catalogo; se responde como {"message": ...}."""

    status_code = 500

    def __init__(self, message: Union[str, List[str]]):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    status_code = 400


class StoreUnavailable(CatalogError):
    status_code = 500


class StoreValidationError(Exception):
    """Lo lanza el store cuando el documento no cumple su esquema."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = messages
