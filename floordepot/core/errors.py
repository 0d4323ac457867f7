# floordepot/core/errors.py
"""
Errors raised by the remote store adapter.

Taxonomy:
  - StoreNotConfiguredError: no script URL resolved, nothing was sent
  - InvalidProductIdError:   empty/blank id, nothing was sent
  - StoreTransportError:     network failure, non-2xx status, unreadable body
  - StoreResponseError:      the script answered {"status": "error", ...}

Reads never raise these (they degrade to an empty catalog); writes always do.
"""


class StoreError(Exception):
    """Base class for every remote store failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreNotConfiguredError(StoreError):
    def __init__(self, message: str = "URL de API no configurada"):
        super().__init__(message)


class InvalidProductIdError(StoreError):
    def __init__(self, message: str = "ID inválido"):
        super().__init__(message)


class StoreTransportError(StoreError):
    pass


class StoreResponseError(StoreError):
    """The store processed the request and reported a failure."""

    NOT_FOUND_MESSAGE = "ID no encontrado"

    @property
    def is_not_found(self) -> bool:
        return self.message.strip() == self.NOT_FOUND_MESSAGE
