"""Tests for waymark.routing.builder — code-adjacent registration."""

from waymark.config import RouterConfig
from waymark.routing.builder import ROUTE_ATTR, RouteTableBuilder, route
from waymark.routing.route import RouteDescriptor, RouteMatch


class UserController:
    @route("/users", name="users.index")
    def index(self) -> str:
        return "list"

    @route("/users/{id}", name="users.show", verb="GET", auth=True)
    def show(self, id: str) -> str:
        return f"user {id}"

    @route("/users/{id}", name="users.update", verb="PUT", admin=True)
    @route("/users/{id}/edit", name="users.edit", verb="POST")
    def update(self, id: str) -> str:
        return f"updated {id}"

    def helper(self) -> None:
        pass


class TestRouteDecorator:
    def test_attaches_metadata(self) -> None:
        specs = getattr(UserController.show, ROUTE_ATTR)
        assert len(specs) == 1
        assert specs[0].path == "/users/{id}"
        assert specs[0].auth is True

    def test_stacked_keep_source_order(self) -> None:
        specs = getattr(UserController.update, ROUTE_ATTR)
        assert [s.name for s in specs] == ["users.update", "users.edit"]

    def test_returns_function(self) -> None:
        assert UserController().index() == "list"


class TestController:
    def test_registers_marked_methods_in_order(self) -> None:
        builder = RouteTableBuilder()
        builder.controller(UserController)
        table = builder.build()

        assert table.names == ("users.index", "users.show", "users.update", "users.edit")
        show = table.get("users.show")
        assert show is not None
        assert show.controller is UserController
        assert show.method == "show"
        assert show.auth is True
        assert table.get("users.update").verb == "put"  # type: ignore[union-attr]
        assert table.get("users.update").admin is True  # type: ignore[union-attr]

    def test_auth_default_from_config(self) -> None:
        builder = RouteTableBuilder(RouterConfig(auth_default=True))
        builder.controller(UserController)
        table = builder.build()
        assert table.get("users.index").auth is True  # type: ignore[union-attr]

    def test_class_decorator(self) -> None:
        builder = RouteTableBuilder()

        @builder.controller
        class PingController:
            @route("/ping", name="ping")
            def ping(self) -> str:
                return "pong"

        assert PingController().ping() == "pong"
        assert builder.build().names == ("ping",)


class TestFunctionRoutes:
    def test_route_decorator(self) -> None:
        builder = RouteTableBuilder()

        @builder.route("/health", name="health")
        def health() -> str:
            return "ok"

        result = builder.build().match("/health")
        assert isinstance(result, RouteMatch)
        assert result.controller is health
        assert result.method is None
        assert health() == "ok"

    def test_add_returns_descriptor(self) -> None:
        builder = RouteTableBuilder()
        descriptor = builder.add("/x", "x", verb="DELETE")
        assert isinstance(descriptor, RouteDescriptor)
        assert descriptor.verb == "delete"
        assert len(builder) == 1

    def test_invalid_registration_excluded(self) -> None:
        builder = RouteTableBuilder()
        assert builder.add("", "nameless-path") is None
        builder.add("/ok", "ok")
        table = builder.build()
        assert table.names == ("ok",)
        assert len(table.skipped) == 1
        assert "no path" in table.skipped[0].reason

    def test_malformed_template_excluded(self) -> None:
        builder = RouteTableBuilder()
        builder.add("/bad/{", "bad")
        builder.add("/good", "good")
        table = builder.build()
        assert table.names == ("good",)
        assert table.skipped[0].entry.name == "bad"

    def test_skip_indices_are_registration_order(self) -> None:
        builder = RouteTableBuilder()
        builder.add("/ok", "ok")
        builder.add("", "nameless-path")
        builder.add("/bad/{", "bad")
        table = builder.build()
        indices = [s.index for s in table.skipped]
        assert indices == [1, 2]
        assert len(set(indices)) == len(indices)

    def test_extend_counts_toward_indices(self) -> None:
        builder = RouteTableBuilder()
        builder.extend([RouteDescriptor(path="/a", name="a")])
        builder.add("/bad/{", "bad")
        assert [s.index for s in builder.build().skipped] == [1]

    def test_extend(self) -> None:
        builder = RouteTableBuilder()
        builder.add("/first", "first")
        builder.extend([RouteDescriptor(path="/second", name="second")])
        assert builder.build().names == ("first", "second")

    def test_build_is_snapshot(self) -> None:
        builder = RouteTableBuilder()
        builder.add("/a", "a")
        table = builder.build()
        builder.add("/b", "b")
        assert table.names == ("a",)
        assert builder.build().names == ("a", "b")
