"""Tests for Forgejo issue dependency operations."""

import json

BLOCKER = {"id": 200, "number": 3, "title": "Design the API", "state": "open"}


def test_list_dependencies(forgejo_fetcher, recorder):
    recorder.queue(200, json=[BLOCKER])

    issues = forgejo_fetcher.dependencies.list_dependencies("octo", "hello", 7)

    assert recorder.last.method == "GET"
    assert recorder.last.url.path == "/api/v1/repos/octo/hello/issues/7/dependencies"
    assert [issue.number for issue in issues] == [3]


def test_add_dependency_defaults_to_same_repository(forgejo_fetcher, recorder):
    recorder.queue(201, json=BLOCKER)

    issue = forgejo_fetcher.dependencies.add_dependency("octo", "hello", 7, 3)

    assert recorder.last.method == "POST"
    assert json.loads(recorder.last.content) == {
        "index": 3,
        "owner": "octo",
        "repo": "hello",
    }
    assert issue.title == "Design the API"


def test_remove_dependency_in_other_repository(forgejo_fetcher, recorder):
    recorder.queue(200, json=BLOCKER)

    forgejo_fetcher.dependencies.remove_dependency(
        "octo", "hello", 7, 3, dependency_owner="acme", dependency_repo="api"
    )

    assert recorder.last.method == "DELETE"
    assert recorder.last.headers["Content-Type"] == "application/json"
    assert json.loads(recorder.last.content) == {
        "index": 3,
        "owner": "acme",
        "repo": "api",
    }


def test_blocking_relations_use_blocks_endpoint(forgejo_fetcher, recorder):
    recorder.queue(200, json=[])
    recorder.queue(201, json=BLOCKER)
    recorder.queue(200, json=BLOCKER)

    assert forgejo_fetcher.dependencies.list_blocking("octo", "hello", 7) == []
    forgejo_fetcher.dependencies.add_blocking("octo", "hello", 7, 9)
    forgejo_fetcher.dependencies.remove_blocking("octo", "hello", 7, 9)

    assert [request.method for request in recorder.requests] == [
        "GET",
        "POST",
        "DELETE",
    ]
    assert {request.url.path for request in recorder.requests} == {
        "/api/v1/repos/octo/hello/issues/7/blocks"
    }
    assert json.loads(recorder.requests[1].content)["index"] == 9
