"""Tests for tinyroute.router — registration, dispatch, and navigation state."""

import logging

import pytest

from tinyroute.config import RouterConfig
from tinyroute.errors import ConfigurationError
from tinyroute.navigation.history import MemoryHistory
from tinyroute.navigation.state import ViewSnapshot
from tinyroute.router import Router


@pytest.fixture
def history() -> MemoryHistory:
    return MemoryHistory("/")


@pytest.fixture
def router(history: MemoryHistory) -> Router:
    return Router(history=history)


class TestRegistration:
    def test_route_returns_compiled_route(self, router: Router) -> None:
        route = router.route("/users/:id", "user")
        assert route.name == "user"
        assert route.param_keys == ("id",)
        assert route.explicit_handler is False
        assert router.routes == (route,)

    def test_malformed_pattern_fails_at_registration(self, router: Router) -> None:
        with pytest.raises(ConfigurationError):
            router.route("/:id/:id", "broken")
        assert router.routes == ()

    def test_fragment_pattern_fails_at_registration(self, router: Router) -> None:
        with pytest.raises(ConfigurationError, match="query or fragment"):
            router.route("/faq#top", "faq")
        assert router.reverse("faq") is None

    def test_empty_name_rejected(self, router: Router) -> None:
        with pytest.raises(ConfigurationError, match="non-empty string name"):
            router.route("/", "")

    def test_non_callable_handler_rejected(self, router: Router) -> None:
        with pytest.raises(ConfigurationError, match="must be callable"):
            router.route("/", "home", "home.html")  # type: ignore[arg-type]

    def test_handles_decorator(self, router: Router) -> None:
        @router.handles("/logout", "logout")
        def logout(router: Router, params: dict[str, str]) -> None:
            router.render("goodbye")

        assert router.routes[0].handler is logout
        assert router.routes[0].explicit_handler is True

    def test_cannot_register_after_start(self, router: Router) -> None:
        router.start()
        with pytest.raises(RuntimeError):
            router.route("/late", "late")

    def test_duplicate_names_keep_both_routes(self, router: Router) -> None:
        router.route("/first", "page")
        router.route("/second", "page")
        assert len(router.routes) == 2
        assert router.reverse("page") == "/second"
        router.load("/first")
        assert router.view == "page"


class TestDispatch:
    def test_default_handler_selects_named_view(self, router: Router) -> None:
        router.route("/about", "about")
        router.load("/about")
        assert router.view == "about"
        assert router.current_path == "/about"
        assert router.current_route is router.routes[0]
        assert router.params == {}

    def test_params_extracted(self, router: Router) -> None:
        router.route("/users/:id/posts/:post", "post")
        router.load("/users/7/posts/99")
        assert router.params == {"id": "7", "post": "99"}

    def test_handler_receives_router_and_params(self, router: Router) -> None:
        calls: list[tuple[Router, dict[str, str]]] = []

        def handler(r: Router, params: dict[str, str]) -> None:
            calls.append((r, params))
            r.render("custom")

        router.route("/users/:id", "user", handler)
        router.load("/users/5")
        assert calls == [(router, {"id": "5"})]
        assert router.view == "custom"

    def test_handler_params_are_a_copy(self, router: Router) -> None:
        def handler(r: Router, params: dict[str, str]) -> None:
            params["id"] = "changed"

        router.route("/users/:id", "user", handler)
        router.load("/users/5")
        assert router.params == {"id": "5"}

    def test_first_registered_route_wins(self, router: Router) -> None:
        hits: list[str] = []
        router.route("/users/me", "me", lambda r, p: hits.append("me"))
        router.route("/users/:id", "user", lambda r, p: hits.append("user"))

        router.load("/users/me")
        assert hits == ["me"]

    def test_view_reset_when_handler_does_not_render(self, router: Router) -> None:
        router.route("/about", "about")
        router.route("/ping", "ping", lambda r, p: None)
        router.load("/about")
        router.load("/ping")
        assert router.view is None
        assert router.current_route is not None
        assert router.current_route.name == "ping"

    def test_no_match_selects_not_found(self, router: Router) -> None:
        router.load("/anything")
        assert router.view == "not_found"
        assert router.current_path == "/anything"
        assert router.current_route is None
        assert router.params == {}

    def test_not_found_view_configurable(self, history: MemoryHistory) -> None:
        router = Router(RouterConfig(not_found_view="missing"), history=history)
        router.load("/nope")
        assert router.view == "missing"

    def test_no_match_clears_previous_params(self, router: Router) -> None:
        router.route("/users/:id", "user")
        router.load("/users/1")
        router.load("/nope")
        assert router.params == {}
        assert router.current_route is None

    def test_handler_errors_propagate(self, router: Router) -> None:
        def handler(r: Router, params: dict[str, str]) -> None:
            raise ValueError("boom")

        router.route("/boom", "boom", handler)
        with pytest.raises(ValueError, match="boom"):
            router.load("/boom")
        assert router.current_path == "/boom"


class TestHistory:
    def test_new_path_pushed(self, router: Router, history: MemoryHistory) -> None:
        router.load("/about")
        assert history.entries == ("/", "/about")
        assert history.location == "/about"

    def test_same_path_not_pushed_again(self, router: Router, history: MemoryHistory) -> None:
        router.route("/about", "about")
        router.load("/about")
        first = router.snapshot
        router.load("/about")
        second = router.snapshot
        assert history.entries == ("/", "/about")
        assert (second.view, second.path, second.route_name) == (first.view, first.path, first.route_name)
        assert dict(second.params) == dict(first.params)

    def test_current_location_not_pushed(self, router: Router, history: MemoryHistory) -> None:
        router.load("/")
        assert history.entries == ("/",)

    def test_not_found_still_pushed(self, router: Router, history: MemoryHistory) -> None:
        router.load("/missing")
        assert history.location == "/missing"


class TestStart:
    def test_loads_current_location(self) -> None:
        history = MemoryHistory("/users/3")
        router = Router(history=history)
        router.route("/users/:id", "user")
        router.start()
        assert router.view == "user"
        assert router.params == {"id": "3"}
        assert history.entries == ("/users/3",)
        assert router.registry.frozen is True
        assert router.started is True

    def test_start_twice_rejected(self, router: Router) -> None:
        router.start()
        with pytest.raises(RuntimeError, match="already been started"):
            router.start()

    def test_connects_link_interceptor(self, router: Router) -> None:
        router.route("/about", "about")
        router.start()
        assert router.links is not None
        assert router.links.click("http://localhost/about") is True
        assert router.view == "about"

    def test_link_interception_can_be_disabled(self, history: MemoryHistory) -> None:
        router = Router(RouterConfig(intercept_links=False), history=history)
        router.start()
        assert router.links is None

    def test_connects_sources(self, history: MemoryHistory) -> None:
        router = Router(history=history, sources=[history])
        router.route("/", "home")
        router.route("/about", "about")
        router.start()
        router.load("/about")
        history.back()
        assert router.view == "home"

    def test_stop_disconnects_sources(self, history: MemoryHistory) -> None:
        router = Router(history=history, sources=[history])
        router.route("/", "home")
        router.route("/about", "about")
        router.start()
        router.load("/about")
        router.stop()
        history.back()
        assert router.view == "about"


class TestSubscribe:
    def test_snapshot_published_after_dispatch(self, router: Router) -> None:
        seen: list[ViewSnapshot] = []
        router.subscribe(seen.append)
        router.route("/users/:id", "user")
        router.load("/users/9")

        assert len(seen) == 1
        assert seen[0].view == "user"
        assert dict(seen[0].params) == {"id": "9"}
        assert seen[0].path == "/users/9"
        assert seen[0].route_name == "user"

    def test_not_found_published(self, router: Router) -> None:
        seen: list[ViewSnapshot] = []
        router.subscribe(seen.append)
        router.load("/nope")
        assert seen[0].view == "not_found"
        assert seen[0].route_name is None

    def test_unsubscribe(self, router: Router) -> None:
        seen: list[ViewSnapshot] = []
        unsubscribe = router.subscribe(seen.append)
        unsubscribe()
        router.load("/nope")
        assert seen == []

    def test_snapshot_params_read_only(self, router: Router) -> None:
        router.route("/users/:id", "user")
        router.load("/users/1")
        with pytest.raises(TypeError):
            router.snapshot.params["id"] = "2"  # type: ignore[index]

    def test_redirecting_handler_publishes_once(self, router: Router) -> None:
        seen: list[ViewSnapshot] = []
        router.subscribe(seen.append)
        router.route("/", "home")
        router.route("/old", "old", lambda r, p: r.redirect("home"))
        router.load("/old")

        assert [s.path for s in seen] == ["/"]
        assert router.view == "home"


class TestDebugLogging:
    def test_debug_traces_dispatch(
        self, history: MemoryHistory, caplog: pytest.LogCaptureFixture
    ) -> None:
        router = Router(RouterConfig(debug=True), history=history)
        router.route("/about", "about")
        with caplog.at_level(logging.DEBUG, logger="tinyroute"):
            router.load("/about")
        assert "loading path: /about" in caplog.text
        assert "comparing route: /about" in caplog.text
        assert "rendering view: about" in caplog.text

    def test_quiet_without_debug(self, router: Router, caplog: pytest.LogCaptureFixture) -> None:
        router.route("/about", "about")
        with caplog.at_level(logging.DEBUG, logger="tinyroute"):
            router.load("/about")
        assert caplog.records == []
