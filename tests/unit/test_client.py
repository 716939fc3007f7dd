"""Tests for DataPipelineClient."""

from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from datapipe.backends.base import BaseBackend
from datapipe.backends.http import HttpBackend
from datapipe.backends.mock import MockBackend
from datapipe.client import DataPipelineClient, create_client
from datapipe.config import ClientConfig, QueryOptions, Sphere
from datapipe.exceptions import (
    BackendNotFoundError,
    OperationNotImplementedError,
    PaginationLimitError,
)
from datapipe.plugins import register_backend_factory


class RecordingBackend(BaseBackend):
    """Backend returning canned query pages and recording every call."""

    name = "recording"

    def __init__(self, pages=None, described=None):
        self.pages = list(pages or [])
        self.described = described or {"pipelineObjects": []}
        self.calls = []

    def describe_objects(self, params):
        self.calls.append(("describe", params))
        return self.described

    def query_objects(self, params):
        self.calls.append(("query", params))
        return self.pages.pop(0)


class TestDescribeObjects:
    def test_builds_params(self):
        backend = RecordingBackend()
        client = DataPipelineClient(backend)

        result = client.describe_objects("df-1", ["a", "b"], {"evaluateExpressions": True})

        assert result == {"pipelineObjects": []}
        assert backend.calls == [
            (
                "describe",
                {"pipelineId": "df-1", "objectIds": ["a", "b"], "evaluateExpressions": True},
            )
        ]

    def test_accepts_any_sequence(self):
        backend = RecordingBackend()
        DataPipelineClient(backend).describe_objects("df-1", ("a",))
        assert backend.calls[0][1]["objectIds"] == ["a"]

    def test_rejects_more_than_25_ids(self):
        backend = RecordingBackend()
        with pytest.raises(ValueError, match="1 to 25"):
            DataPipelineClient(backend).describe_objects("df-1", [str(i) for i in range(26)])
        assert backend.calls == []

    def test_rejects_empty_ids(self):
        with pytest.raises(ValueError, match="1 to 25"):
            DataPipelineClient(RecordingBackend()).describe_objects("df-1", [])

    def test_rejects_empty_pipeline_id(self):
        with pytest.raises(ValueError, match="pipeline_id"):
            DataPipelineClient(RecordingBackend()).describe_objects("", ["a"])


class TestQueryObjects:
    def test_returns_page_unchanged(self):
        """The single-page call does not interpret the continuation flag."""
        body = {"ids": ["a"], "hasMoreResults": True, "marker": "X"}
        backend = RecordingBackend(pages=[body])

        result = DataPipelineClient(backend).query_objects(
            "df-1", Sphere.INSTANCE, QueryOptions(limit=1)
        )

        assert result is body
        assert backend.calls == [
            ("query", {"pipelineId": "df-1", "sphere": "INSTANCE", "limit": 1})
        ]


class TestQueryAllObjects:
    def test_unknown_option_rejected_before_any_request(self):
        backend = RecordingBackend(pages=[{"ids": ["a"], "hasMoreResults": False}])

        with pytest.raises(ValidationError):
            DataPipelineClient(backend).query_all_objects(
                "df-1", "INSTANCE", {"Marker": "resume-here", "limt": 5}
            )
        assert backend.calls == []

    def test_collects_all_pages(self):
        backend = RecordingBackend(
            pages=[
                {"ids": ["a", "b"], "hasMoreResults": True, "marker": "X"},
                {"ids": ["c"], "hasMoreResults": False},
            ]
        )

        result = DataPipelineClient(backend).query_all_objects("df-1", Sphere.INSTANCE)

        assert result == ["a", "b", "c"]
        assert backend.calls[1][1]["marker"] == "X"

    def test_client_bound_applies(self):
        backend = RecordingBackend(
            pages=[{"ids": ["a"], "hasMoreResults": True, "marker": "X"}] * 3
        )
        client = DataPipelineClient(backend, max_pages=2)

        with pytest.raises(PaginationLimitError):
            client.query_all_objects("df-1", Sphere.INSTANCE)
        assert len(backend.calls) == 2

    def test_call_bound_overrides_client_bound(self):
        backend = RecordingBackend(
            pages=[
                {"ids": ["a"], "hasMoreResults": True, "marker": "X"},
                {"ids": ["b"], "hasMoreResults": True, "marker": "Y"},
                {"ids": ["c"], "hasMoreResults": False},
            ]
        )
        client = DataPipelineClient(backend, max_pages=1)

        assert client.query_all_objects("df-1", Sphere.INSTANCE, max_pages=3) == ["a", "b", "c"]

    def test_iter_query_pages(self):
        backend = RecordingBackend(
            pages=[
                {"ids": ["a"], "hasMoreResults": True, "marker": "X"},
                {"ids": ["b"], "hasMoreResults": False},
            ]
        )
        pages = list(DataPipelineClient(backend).iter_query_pages("df-1", "ATTEMPT"))
        assert [p.ids for p in pages] == [["a"], ["b"]]


class TestMockBackendClient:
    """The mock backend never fabricates results."""

    def test_describe_not_implemented(self):
        client = DataPipelineClient(MockBackend())
        with pytest.raises(OperationNotImplementedError, match="DescribeObjects"):
            client.describe_objects("df-1", ["a"])

    def test_query_not_implemented(self):
        client = DataPipelineClient(MockBackend())
        with pytest.raises(OperationNotImplementedError, match="QueryObjects"):
            client.query_objects("df-1", Sphere.COMPONENT)

    def test_query_all_not_implemented(self):
        client = DataPipelineClient(MockBackend())
        with pytest.raises(NotImplementedError):
            client.query_all_objects("df-1", Sphere.COMPONENT)


class TestCreateClient:
    def test_default_is_http(self):
        client = create_client()
        assert isinstance(client.backend, HttpBackend)
        assert client.backend.endpoint == "https://datapipeline.us-east-1.amazonaws.com/"
        assert client.max_pages is None

    def test_mock_backend(self):
        client = create_client(ClientConfig(backend="mock", max_pages=7))
        assert isinstance(client.backend, MockBackend)
        assert client.max_pages == 7

    def test_auth_passed_to_factory(self):
        factory = MagicMock(return_value=RecordingBackend())
        register_backend_factory("custom", factory)
        auth = object()

        create_client(ClientConfig(backend="custom"), auth=auth)

        factory.assert_called_once()
        assert factory.call_args.kwargs == {"auth": auth}

    def test_plugin_factory_without_auth(self):
        backend = RecordingBackend()
        register_backend_factory("custom", lambda config: backend)

        client = create_client(ClientConfig(backend="custom"))

        assert client.backend is backend

    def test_user_factory_for_builtin_name_is_kept(self):
        backend = RecordingBackend()
        register_backend_factory("http", lambda config: backend)

        assert create_client().backend is backend
        assert create_client().backend is backend

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setattr("datapipe.client.load_plugins", lambda: None)
        with pytest.raises(BackendNotFoundError) as exc_info:
            create_client(ClientConfig(backend="nope"))
        assert "http" in exc_info.value.available
        assert "mock" in exc_info.value.available
