"""
Exceptions personnalisées pour Rube MCP Adapter.
"""


class RubeAdapterError(Exception):
    """Exception de base pour toutes les erreurs de l'adapter."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code or "unknown_error"
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"[{self.code}] {self.message} - Détails: {self.details}"
        return f"[{self.code}] {self.message}"


class ConfigurationError(RubeAdapterError):
    """Erreur de configuration (variable d'environnement invalide)."""

    def __init__(self, message: str, config_key: str = None):
        super().__init__(
            message=message,
            code="config_error",
            details={"key": config_key} if config_key else {}
        )


class BackendError(RubeAdapterError):
    """
    Erreur lors d'un appel HTTP vers l'API Rube.

    Codes:
    - connect_error: backend injoignable (erreur transport httpx)
    - http_error: statut HTTP hors 2xx
    - invalid_json: corps de réponse non JSON
    """

    def __init__(
        self,
        message: str,
        code: str,
        url: str = None,
        status_code: int = None,
        details: dict = None
    ):
        super().__init__(
            message=message,
            code=code,
            details={
                **({"url": url} if url else {}),
                **({"status_code": status_code} if status_code is not None else {}),
                **(details or {})
            }
        )
        self.url = url
        self.status_code = status_code


class InvalidEnvelopeError(RubeAdapterError):
    """Message JSON valide mais qui n'est pas une requête JSON-RPC."""

    def __init__(self, message: str, request_id: object = None):
        super().__init__(
            message=message,
            code="invalid_envelope",
            details={"id": request_id} if request_id is not None else {}
        )
        self.request_id = request_id


class InvalidParamsError(RubeAdapterError):
    """Paramètre requis absent ou mal typé dans `params`."""

    def __init__(self, message: str, method: str = None, param: str = None):
        super().__init__(
            message=message,
            code="invalid_params",
            details={
                **({"method": method} if method else {}),
                **({"param": param} if param else {})
            }
        )
