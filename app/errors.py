# app/errors.py
"""
ワークフロー層の例外。
サービス関数はこれらをそのまま送出し、HTTP ステータスへの変換は main.py のハンドラで行う。
"""


class DirectoryError(Exception):
    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(DirectoryError):
    status_code = 404
    default_detail = "Not found"


class AuthorizationError(DirectoryError):
    status_code = 403
    default_detail = "Not allowed"


class AuthenticationRequiredError(AuthorizationError):
    """identity が無い（未ログイン）場合。403 ではなく 401 を返す"""
    status_code = 401
    default_detail = "Sign-in required"


class ConflictError(DirectoryError):
    status_code = 409
    default_detail = "Conflict"


class StoreUnavailableError(DirectoryError):
    status_code = 503
    default_detail = "Store unavailable"
