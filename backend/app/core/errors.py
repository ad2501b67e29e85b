"""Error taxonomy shared by the relay and the HTTP layer.

Every error carries the message shown to the client and the status code it
is rendered with. Client-input errors never reach the upstream provider.
"""


class RelayError(Exception):
    status_code: int = 500
    message: str = "Error interno del servidor"

    def __init__(self, message: str = None, status_code: int = None):
        self.message = message or self.message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidFile(RelayError):
    status_code = 400
    message = "Archivo no válido"


class UnsupportedFormat(RelayError):
    status_code = 400
    message = "Formato no soportado. Usa MP4, WebM o Ogg."


class FileTooLarge(RelayError):
    status_code = 400
    message = "El archivo excede el tamaño máximo de 500 MB."


class MissingIdentifier(RelayError):
    status_code = 400
    message = "Se requiere un videoId"


class UpstreamError(RelayError):
    status_code = 500
    message = "Error del proveedor de video"


class InternalError(RelayError):
    status_code = 500
    message = "Error interno del servidor"


class MissingCredentials(InternalError):
    pass
