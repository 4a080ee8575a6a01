"""Tests for the response envelope and the central error mapping."""

import importlib.util
import json
import unittest
import warnings

from postboard.core import errors as errors_module
from postboard.core.errors import (
    ApiError,
    Forbidden,
    NotFound,
    Unauthenticated,
    ValidationFailed,
)
from postboard.core.responses import error, success
from tests.api_case import ApiTestCase


class TestEnvelope(unittest.TestCase):
    def test_success_defaults(self) -> None:
        resp = success()
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(json.loads(resp.body), {"status": True, "message": "", "data": {}})

    def test_success_created(self) -> None:
        resp = success({"post": {"id": 1}}, "Post created successfully", 201)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(json.loads(resp.body)["data"], {"post": {"id": 1}})

    def test_error_omits_empty_errors(self) -> None:
        body = json.loads(error("Unauthorized", 403).body)
        self.assertEqual(body, {"status": False, "message": "Unauthorized"})

    def test_error_with_field_errors(self) -> None:
        body = json.loads(error("Validation failed", 422, {"email": ["bad"]}).body)
        self.assertEqual(body["errors"], {"email": ["bad"]})


class TestTaxonomy(unittest.TestCase):
    def test_status_and_default_messages(self) -> None:
        cases = (
            (Unauthenticated(), 401, "Unauthenticated"),
            (Forbidden(), 403, "Unauthorized"),
            (NotFound(), 404, "Resource not found"),
            (ValidationFailed({"x": ["y"]}), 422, "Validation failed"),
            (ApiError(), 500, "Server error"),
        )
        for exc, status_code, message in cases:
            with self.subTest(exc=type(exc).__name__):
                self.assertEqual(exc.status_code, status_code)
                self.assertEqual(exc.message, message)

    def test_custom_message(self) -> None:
        self.assertEqual(NotFound("Post not found").message, "Post not found")
        self.assertEqual(ValidationFailed({"x": ["y"]}).errors, {"x": ["y"]})

    def test_module_loads_without_deprecation_warnings(self) -> None:
        # Load a private copy so the imported exception classes stay untouched.
        spec = importlib.util.spec_from_file_location("errors_copy", errors_module.__file__)
        module = importlib.util.module_from_spec(spec)
        with warnings.catch_warnings():
            warnings.simplefilter("error", DeprecationWarning)
            spec.loader.exec_module(module)
        self.assertEqual(module.ValidationFailed.status_code, 422)


class TestFrameworkErrorsUseEnvelope(ApiTestCase):
    def test_unknown_route(self) -> None:
        resp = self.client.get("/api/nothing-here")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"status": False, "message": "Resource not found"})

    def test_wrong_method(self) -> None:
        resp = self.client.patch("/api/login", json={})
        self.assertEqual(resp.status_code, 405)
        self.assertIs(resp.json()["status"], False)

    def test_root_discovery(self) -> None:
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        self.assertIs(resp.json()["status"], True)
        self.assertEqual(resp.json()["data"]["api"], "/api")

    def test_body_must_be_object(self) -> None:
        resp = self.client.post("/api/login", json=["a@x.com", "secret1"])
        self.assertEqual(resp.status_code, 422)
        self.assertEqual(
            resp.json()["errors"], {"body": ["The request body must be a JSON object."]}
        )


if __name__ == "__main__":
    unittest.main()
