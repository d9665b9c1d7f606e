from fastapi import APIRouter, FastAPI, Request
from fastapi.testclient import TestClient

from domain import Config, English, Greeter, Missing
from inject_kernel import get_injector
from inject_kernel.web import Provide, create_app, get_request_injector

router = APIRouter()


@router.get("/greet")
def greet(greeter: Greeter = Provide(Greeter), config: Config = Provide(Config)) -> dict:
    return {"greeting": greeter.greet(), "dsn": config.dsn}


@router.get("/request-path")
def request_path(req: Request = Provide(Request)) -> dict:
    return {"path": req.url.path, "is_request": isinstance(req, Request)}


@router.get("/bindings")
def bindings(request: Request) -> dict:
    scoped = get_request_injector(request)
    return {"types": [b.type.__name__ for b in scoped.bindings]}


@router.get("/context")
async def context(request: Request) -> dict:
    return {
        "same": get_injector() is get_request_injector(request),
        "child": get_request_injector(request).parent is request.app.state.injector,
    }


@router.get("/missing")
def missing(value: Missing = Provide(Missing)) -> dict:
    return {"never": True}


def _client(injector, **kwargs) -> TestClient:
    injector.map(English()).map(Config("web"))
    return TestClient(create_app(injector, title="Test", routers=[router], **kwargs))


def test_app_is_bound_into_root_injector(injector) -> None:
    client = _client(injector)
    assert injector.get(FastAPI) is client.app
    assert client.app.state.injector is injector


def test_provide_resolves_from_injector(injector) -> None:
    res = _client(injector).get("/greet")
    assert res.status_code == 200
    assert res.json() == {"greeting": "hello", "dsn": "web"}


def test_request_is_mapped_into_child_only(injector) -> None:
    res = _client(injector).get("/request-path")
    assert res.status_code == 200
    assert res.json() == {"path": "/request-path", "is_request": True}
    assert not injector.has(Request)


def test_request_is_bound_under_request_type(injector) -> None:
    res = _client(injector).get("/bindings")
    assert res.status_code == 200
    assert res.json()["types"] == ["Request"]


def test_request_injector_is_bound_in_context(injector) -> None:
    res = _client(injector).get("/context")
    assert res.json() == {"same": True, "child": True}


def test_missing_dependency_returns_envelope(injector) -> None:
    res = _client(injector).get("/missing")
    assert res.status_code == 500
    body = res.json()
    assert body["error"]["code"] == "DEPENDENCY_NOT_FOUND"
    assert body["error"]["details"]["type"].endswith("Missing")


def test_without_request_scope_falls_back_to_app_injector(injector) -> None:
    client = _client(injector, request_scoped=False)
    assert client.get("/greet").json() == {"greeting": "hello", "dsn": "web"}
    assert client.get("/request-path").status_code == 500
