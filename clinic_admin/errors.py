"""Service-level errors.

Services raise these; routers render them into the JSON envelope of their
resource using ``status_code`` and the message.
"""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    status_code = 400


class NotFoundError(ServiceError):
    status_code = 404


class StoreError(ServiceError):
    pass


class UploadError(StoreError):
    pass


class PersistenceError(StoreError):
    pass
