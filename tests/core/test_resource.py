import pytest

from resourcekit import (
    ConfigurationError,
    InMemoryTransport,
    Resource,
    ResourceType,
    TransportNotConfiguredError,
    hooks,
)
from tests.support import drain


def _audit(resource, config):
    resource.audit.append(config["url"])


class Record(Resource):
    class Meta:
        hooks = {"before-request": _audit}

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.audit = []


class SpecialRecord(Record):
    class Meta:
        name = "special"


class Listing(Resource):
    pass


def test_meta_builds_resource_type():
    assert isinstance(Record._meta, ResourceType)
    assert Record._meta.name == "record"
    assert Record._meta.resource is Record
    assert Record._meta.parent is None
    assert SpecialRecord._meta.name == "special"
    assert SpecialRecord._meta.parent is Record._meta
    assert "_meta" not in Resource.__dict__


def test_subclass_meta_does_not_reregister_parent_hooks():
    assert Record._meta.hooks.handlers("before-request") == (_audit,)
    assert SpecialRecord._meta.hooks.handlers("before-request") == ()


def test_type_hooks_fire_for_unscoped_instances():
    record = Record()
    record.dispatch("before-request", [{"url": "/records/1"}])
    assert record.audit == ["/records/1"]


def test_type_hooks_bubble_through_parent_type_and_global_registry():
    calls = []
    hooks.register("ping", lambda ctx: calls.append(("global", ctx)))
    SpecialRecord.register_hook("ping", lambda ctx: calls.append(("special", ctx)))
    Record.register_hook("ping", lambda ctx: calls.append(("record", ctx)))

    record = SpecialRecord()
    record.dispatch("ping")

    assert calls == [("special", record), ("record", record), ("global", record)]


def test_register_hook_as_decorator():
    calls = []

    @Listing.register_hook("ping")
    def handler(ctx):
        calls.append(ctx)

    listing = Listing()
    listing.dispatch("ping")
    assert calls == [listing]


def test_register_hook_on_base_resource_rejected():
    with pytest.raises(ConfigurationError):
        Resource.register_hook("ping", lambda ctx: None)


def test_scoped_instance_bubbles_to_scope_instead_of_type():
    calls = []
    listing = Listing()
    listing.on("before-request", lambda ctx, config: calls.append(("listing", ctx)))

    record = listing.build(Record)
    record.dispatch("before-request", [{"url": "/records/2"}])

    assert record.scope is listing
    assert calls == [("listing", record)]
    # Scope is tried first; the Record type hook is not an additional hop.
    assert record.audit == []


def test_build_defaults_to_same_class_and_shares_transport():
    transport = InMemoryTransport()
    listing = Listing(transport=transport)
    child = listing.build(title="first")
    assert type(child) is Listing
    assert child.transport is transport
    assert child.title == "first"


def test_invalid_meta_hooks_rejected():
    with pytest.raises(ConfigurationError):

        class Broken(Resource):
            class Meta:
                hooks = {"ping": "not callable"}

    with pytest.raises(ConfigurationError):

        class AlsoBroken(Resource):
            class Meta:
                hooks = ["ping"]


def test_invalid_meta_transport_rejected():
    with pytest.raises(ConfigurationError):

        class Broken(Resource):
            class Meta:
                transport = "http://example.com"


def test_meta_hooks_accept_lists():
    calls = []

    class Multi(Resource):
        class Meta:
            hooks = {"ping": [lambda ctx: calls.append(1), lambda ctx: calls.append(2)]}

    Multi().dispatch("ping")
    assert calls == [1, 2]


def test_missing_transport_raises():
    with pytest.raises(TransportNotConfiguredError):
        Listing().send({"url": "/x"})


@pytest.mark.asyncio
async def test_meta_transport_is_inherited_and_used():
    transport = InMemoryTransport()
    transport.route("GET", "/records/1", lambda config: {"id": 1})

    class Base(Resource):
        class Meta:
            transport = None

    Base._meta.transport = transport

    class Child(Base):
        pass

    child = Child()
    assert child.get_transport() is transport
    await child.send({"method": "GET", "url": "/records/1"})
    assert child.last_response.data == {"id": 1}


@pytest.mark.asyncio
async def test_instance_transport_wins_over_meta(manual_transport):
    record = Record(transport=manual_transport)
    record.send({"url": "/records/3"})
    await drain()
    assert record.audit == ["/records/3"]
    manual_transport.resolve(0, "done")
    await record
    assert repr(record) == "<Record status=ok>"
