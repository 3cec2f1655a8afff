import unittest

from drivelink.errors.exceptions import (
    AuthError,
    ConflictError,
    DriveLinkError,
    HttpErrorInfo,
    InvalidArgumentError,
    NotDownloadableError,
    NotFoundError,
    PermissionDeniedError,
    ProtocolViolationError,
    QuotaExceededError,
    RateLimitError,
    RemoteRejectedError,
    SessionExpiredError,
    TransferFailedError,
    UnauthenticatedError,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = DriveLinkError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_kinds_are_distinct_where_callers_branch_on_them(self) -> None:
        kinds = {
            UnauthenticatedError("x").kind,
            NotFoundError("x").kind,
            ConflictError("x").kind,
            RemoteRejectedError("x").kind,
            ProtocolViolationError("x").kind,
            SessionExpiredError("x").kind,
            NotDownloadableError("x").kind,
            TransferFailedError("x").kind,
        }
        self.assertEqual(len(kinds), 8)
        self.assertEqual(AuthError("x").kind, "unauthenticated")

    def test_describe_includes_kind_and_remote_body(self) -> None:
        err = RemoteRejectedError("upload failed", details={"body": "quota exceeded"})
        self.assertEqual(err.describe(), "remote_rejected: upload failed (quota exceeded)")
        self.assertEqual(NotFoundError("gone").describe(), "not_found: gone")

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, NotFoundError)

        err = map_http_error(HttpErrorInfo(status_code=400, message="bad req"))
        self.assertIsInstance(err, InvalidArgumentError)

        err = map_http_error(HttpErrorInfo(status_code=429, message="rate", retry_after=5.0))
        self.assertIsInstance(err, RateLimitError)
        self.assertEqual(err.details["retry_after"], 5.0)

        err = map_http_error(HttpErrorInfo(status_code=409, message="conflict"))
        self.assertIsInstance(err, ConflictError)

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, AuthError)

    def test_map_http_error_403_quota_vs_permission(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=403, code="quotaLimitReached", message="quota")
        )
        self.assertIsInstance(err, QuotaExceededError)

        err = map_http_error(HttpErrorInfo(status_code=403, code="accessDenied", message="x"))
        self.assertIsInstance(err, PermissionDeniedError)

    def test_map_http_error_507_is_quota(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=507, code="insufficientStorage"))
        self.assertIsInstance(err, QuotaExceededError)

    def test_map_http_error_5xx_is_remote_rejected(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=503, message="unavail", body="later"))
        self.assertIsInstance(err, RemoteRejectedError)
        self.assertEqual(err.details["status_code"], 503)
        self.assertEqual(err.details["body"], "later")

    def test_map_http_error_default_message(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=418))
        self.assertIsInstance(err, RemoteRejectedError)
        self.assertEqual(str(err), "HTTP error 418")


if __name__ == "__main__":
    unittest.main()
