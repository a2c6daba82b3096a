"""Unit tests for strongly-typed identities."""

from uuid import UUID, uuid4

from orders.domain.model.identifiers import CustomerId, OrderId, ProductId


class TestIdentifiers:

    def test_equality_is_by_wrapped_value(self):
        raw = uuid4()
        assert OrderId(raw) == OrderId(raw)
        assert hash(OrderId(raw)) == hash(OrderId(raw))

    def test_different_values_not_equal(self):
        assert ProductId(uuid4()) != ProductId(uuid4())

    def test_different_identity_types_never_equal(self):
        raw = uuid4()
        assert OrderId(raw) != CustomerId(raw)
        assert CustomerId(raw) != ProductId(raw)

    def test_generate_produces_fresh_uuids(self):
        a, b = OrderId.generate(), OrderId.generate()
        assert isinstance(a.value, UUID)
        assert a != b

    def test_str_is_canonical_uuid(self):
        raw = UUID("12345678-1234-5678-1234-567812345678")
        assert str(CustomerId(raw)) == "12345678-1234-5678-1234-567812345678"

    def test_usable_as_dict_keys(self):
        raw = uuid4()
        lookup = {OrderId(raw): "found"}
        assert lookup[OrderId(raw)] == "found"
