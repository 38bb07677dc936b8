"""Tests for FieldRegistry."""

from formflow.validation import (
    FieldStatus,
    MinLength,
    Required,
)


class TestRegister:
    """Tests for FieldRegistry.register."""

    def test_register_new_field(self, registry):
        registry.register("username", [Required("Required")])

        view = registry.get("username")
        assert view.value == ""
        assert view.status is FieldStatus.UNTOUCHED
        assert "username" in registry
        assert len(registry) == 1

    def test_register_without_rules(self, registry):
        registry.register("note")
        assert registry.get("note") is not None

    def test_reregister_does_not_duplicate(self, registry):
        registry.register("username", [Required("Required")])
        registry.register("username", [Required("Required")])

        assert registry.names() == ["username"]

    def test_reregister_replaces_rules_and_keeps_value(self, registry):
        registry.register("e", [Required("Required")])
        registry.update_value("e", "hi")
        registry.register("e", [])

        assert registry.get("e").value == "hi"
        summary = registry.validate_all()
        assert summary.all_valid
        assert registry.get("e").error is None

    def test_reregister_keeps_status(self, registry):
        registry.register("e", [Required("Required")])
        registry.update_value("e", "")
        registry.register("e", [MinLength(1, "short")])

        view = registry.get("e")
        assert view.status is FieldStatus.ERROR
        assert view.error == "Required"

    def test_last_registration_wins(self, registry):
        registry.register("e", [MinLength(10, "ten")])
        registry.register("e", [MinLength(2, "two")])
        registry.update_value("e", "a")

        assert registry.get("e").error == "two"

    def test_register_copies_rule_sequence(self, registry):
        rules = [Required("Required")]
        registry.register("e", rules)
        rules.clear()

        registry.update_value("e", "")
        assert registry.get("e").error == "Required"

    def test_empty_name_is_ignored(self, registry):
        registry.register("", [Required("Required")])
        assert len(registry) == 0


class TestUpdateValue:
    """Tests for FieldRegistry.update_value."""

    def test_updates_and_validates(self, registry):
        registry.register("username", [Required("Required")])
        registry.update_value("username", "a")

        view = registry.get("username")
        assert view.value == "a"
        assert view.status is FieldStatus.SUCCESS
        assert view.validated

    def test_only_touches_named_field(self, registry):
        registry.register("a", [Required("Required")])
        registry.register("b", [Required("Required")])
        registry.update_value("a", "")

        assert registry.get("a").status is FieldStatus.ERROR
        assert registry.get("b").status is FieldStatus.UNTOUCHED
        assert registry.get("b").validated is False

    def test_unknown_field_is_noop(self, registry):
        registry.register("a", [Required("Required")])
        before = registry.get("a")

        registry.update_value("nonexistent", "x")

        assert registry.get("nonexistent") is None
        assert registry.names() == ["a"]
        assert registry.get("a") == before


class TestValidateAll:
    """Tests for FieldRegistry.validate_all."""

    def test_values_include_valid_and_invalid_fields(self, registry):
        registry.register("a", [Required("Required")])
        registry.register("b", [Required("Required")])
        registry.update_value("a", "x")

        summary = registry.validate_all()

        assert summary.values == {"a": "x", "b": ""}
        assert summary.all_valid is False
        assert summary.errors == {"b": "Required"}
        assert summary.first_error() == "Required"
        assert summary.failed()

    def test_every_field_is_validated(self, registry):
        registry.register("a", [Required("A")])
        registry.register("b", [Required("B")])
        registry.register("c", [Required("C")])

        summary = registry.validate_all()

        assert summary.errors == {"a": "A", "b": "B", "c": "C"}
        for name in ("a", "b", "c"):
            assert registry.get(name).status is FieldStatus.ERROR

    def test_values_keep_registration_order(self, registry):
        for name in ("z", "a", "m"):
            registry.register(name)

        assert list(registry.validate_all().values) == ["z", "a", "m"]

    def test_all_valid(self, registry):
        registry.register("a", [Required("Required")])
        registry.register("note")
        registry.update_value("a", "x")

        summary = registry.validate_all()

        assert summary.all_valid
        assert bool(summary) is True
        assert summary.errors == {}
        assert summary.first_error() is None

    def test_empty_registry_is_valid(self, registry):
        summary = registry.validate_all()
        assert summary.all_valid
        assert summary.values == {}

    def test_values_are_a_copy(self, registry):
        registry.register("a")
        registry.update_value("a", "x")

        summary = registry.validate_all()
        summary.values["a"] = "changed"

        assert registry.get("a").value == "x"


class TestReadHelpers:
    """Tests for read-only registry helpers."""

    def test_values_and_errors(self, registry):
        registry.register("a", [Required("A")])
        registry.register("b", [Required("B")])
        registry.update_value("a", "x")
        registry.update_value("b", "")

        assert registry.values() == {"a": "x", "b": ""}
        assert registry.errors() == {"b": "B"}

    def test_get_unknown(self, registry):
        assert registry.get("missing") is None
        assert "missing" not in registry
