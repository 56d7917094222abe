# vibes/errors.py
# 서비스 계층 예외. 라우터/main.py 에서 HTTP 응답으로 변환한다.


class VibesError(Exception):
    """서비스 계층 공통 베이스"""


class ValidationError(VibesError):
    """
    쓰기 전에 걸러지는 입력 오류.
    code: missing_text | missing_options | missing_bounds | invalid_bounds | invalid_value
    """

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class AuthRequiredError(VibesError):
    """인증된 사용자 없이 쓰기를 시도한 경우"""

    def __init__(self, message: str = "authentication required"):
        super().__init__(message)
        self.message = message


class NotFoundError(VibesError):
    def __init__(self, resource: str, key):
        super().__init__(f"{resource} not found: {key}")
        self.resource = resource
        self.key = key


class StoreError(VibesError):
    """DB(네트워크/권한/제약조건 등) 실패. 재시도하지 않고 그대로 호출자에게 전달."""

    def __init__(self, message: str = "store operation failed"):
        super().__init__(message)
        self.message = message
