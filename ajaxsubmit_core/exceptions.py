"""
ajaxsubmit exceptions
"""


class AjaxSubmitError(Exception):
    """Base exception for ajaxsubmit"""
    pass


class TransportError(AjaxSubmitError):
    """The network exchange did not complete or its payload was unusable.

    ``status`` is one of ``"error"``, ``"timeout"`` or ``"parsererror"``;
    ``detail`` is a short human readable description (HTTP reason phrase,
    exception text).
    """

    def __init__(self, status: str, detail: str = "", http_status: int = 0):
        super().__init__(f"{status}: {detail}" if detail else status)
        self.status = status
        self.detail = detail
        self.http_status = http_status


class UnknownCommandError(AjaxSubmitError):
    """Dispatcher was given a command name it does not know"""
    pass
