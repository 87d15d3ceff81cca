"""Application error definitions."""


class AppException(Exception):
    def __init__(self, message: str, code: str = "error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationAppException(AppException):
    def __init__(self, message: str = "Valor inválido"):
        super().__init__(message=message, code="validation_error")


class InvalidTransition(AppException):
    def __init__(self, view: str, event: str):
        self.view = view
        self.event = event
        super().__init__(
            message=f"Ação '{event}' não disponível na tela '{view}'",
            code="invalid_transition",
        )
