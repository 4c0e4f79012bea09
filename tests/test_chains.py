"""
Tests for rule chains: cascade modes, guards, naming, nesting and collections.
"""

import pytest

from fluentrules import CascadeMode, ConfigurationError, InlineValidator, Validator
from fluentrules.core.context import ValidationContext
from sample_models import Address, Order, User, valid_order, valid_user


class TestCascade:
    def test_stop_reports_first_failure_only(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Id", lambda o: o.id).not_empty().greater_than(0).cascade("stop"))

        report = validator.validate(Order(id=0))

        assert [f.error_code for f in report.failures] == ["NotEmptyValidator"]

    def test_continue_reports_every_failure(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Id", lambda o: o.id).not_empty().greater_than(0).cascade(CascadeMode.CONTINUE))

        report = validator.validate(Order(id=0))

        assert [f.error_code for f in report.failures] == ["NotEmptyValidator", "GreaterThanValidator"]

    def test_validator_level_cascade_mode(self):
        class ContinueValidator(Validator):
            cascade_mode = CascadeMode.CONTINUE

            def __init__(self):
                super().__init__()
                self.rule_for("Age", lambda u: u.age).greater_than(5).greater_than(10)

        report = ContinueValidator().validate(User(age=1))

        assert len(report.failures) == 2

    def test_stop_prevents_delegation_after_not_null(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Address", lambda o: o.address).not_null().set_validator(
                InlineValidator(lambda a: a.rule_for("Town", lambda x: x.town).not_empty())))

        report = validator.validate(Order(id=1, address=None))

        assert [f.property_path for f in report.failures] == ["Address"]

    def test_unknown_cascade_mode_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            InlineValidator(lambda v: v.rule_for("Id").not_empty().cascade("sometimes"))


class TestGuards:
    def test_when_false_skips_chain(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Name", lambda u: u.name).not_empty().when(lambda u: False))

        assert validator.validate(User(name="")).is_valid

    def test_when_true_runs_chain(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Name", lambda u: u.name).not_empty().when(lambda u: u.age is not None))

        assert not validator.validate(User(name="", age=1)).is_valid
        assert validator.validate(User(name="", age=None)).is_valid

    def test_unless_true_skips_chain(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Email", lambda u: u.email).not_empty().unless(lambda u: u.name == "guest"))

        assert validator.validate(User(name="guest")).is_valid
        assert not validator.validate(User(name="ada")).is_valid

    def test_guard_protects_nested_member_access(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Address.Town", lambda o: o.address.town).not_empty().when(
                lambda order: order.address is not None))

        assert validator.validate(Order(id=1, address=None)).is_valid
        report = validator.validate(Order(id=1, address=Address(town="")))
        assert report.failures[0].property_path == "Address.Town"

    def test_guard_receives_context(self):
        seen = []

        def guard(order, context):
            seen.append((order.id, context.property_path()))
            return True

        validator = InlineValidator(lambda v: v.rule_for("Id", lambda o: o.id).greater_than(0).when(guard))
        validator.validate(Order(id=5))

        assert seen == [(5, "")]

    def test_guard_inside_child_sees_element(self):
        child = InlineValidator(
            lambda v: v.rule_for("Name", lambda o: o.name).not_null().when(lambda order: order.id > 1))
        parent = InlineValidator(lambda v: v.rule_for_each("Orders", lambda u: u.orders).set_validator(child))

        report = parent.validate(User(orders=[Order(id=1), Order(id=2)]))

        assert [f.property_path for f in report.failures] == ["Orders[1].Name"]

    def test_validator_level_when_and_otherwise(self):
        class ShippingValidator(Validator):
            def __init__(self):
                super().__init__()
                self.when(
                    lambda o: o.address is not None,
                    lambda: self.rule_for("Address.Town", lambda o: o.address.town).not_empty(),
                ).otherwise(
                    lambda: self.rule_for("Name", lambda o: o.name).not_empty()
                )

        validator = ShippingValidator()

        with_address = validator.validate(Order(address=Address(town=""), name=""))
        without_address = validator.validate(Order(address=None, name=""))

        assert [f.property_path for f in with_address.failures] == ["Address.Town"]
        assert [f.property_path for f in without_address.failures] == ["Name"]

    def test_predicate_errors_propagate_and_restore_path(self):
        context = ValidationContext(Order(id=1))
        validator = InlineValidator(
            lambda v: v.rule_for("Address", lambda o: o.address).must(lambda a: a.town is not None))

        with pytest.raises(AttributeError):
            validator.validate_into(context, Order(id=1, address=None))

        assert context.depth == 0


class TestNaming:
    def test_with_name_changes_message_not_path(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Name", lambda u: u.name).not_null().with_name("Full name"))

        failure = validator.validate(User()).failures[0]

        assert failure.property_path == "Name"
        assert failure.message == "'Full name' must not be empty."

    def test_override_property_name_changes_path(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Name", lambda u: u.name).not_null().override_property_name("FullName"))

        failure = validator.validate(User()).failures[0]

        assert failure.property_path == "FullName"
        assert failure.message == "'Name' must not be empty."

    def test_snake_case_names_are_humanized(self):
        validator = InlineValidator(lambda v: v.rule_for("first_name").not_empty())

        failure = validator.validate({"first_name": ""}).failures[0]

        assert failure.property_path == "first_name"
        assert failure.message == "'First Name' must not be empty."


class TestAccessors:
    def test_default_accessor_reads_attributes_and_keys(self):
        validator = InlineValidator(lambda v: v.rule_for("name").not_empty())

        assert not validator.validate(User(name="")).is_valid
        assert not validator.validate({"name": ""}).is_valid
        assert validator.validate({"name": "ada"}).is_valid

    def test_dot_notation_is_none_safe(self):
        validator = InlineValidator(lambda v: v.rule_for("address.town").not_null())

        report = validator.validate(Order(address=None))

        assert report.failures[0].property_path == "address.town"
        assert report.failures[0].message == "'Address Town' must not be empty."

    def test_invalid_declarations(self):
        with pytest.raises(ConfigurationError):
            InlineValidator(lambda v: v.rule_for(""))
        with pytest.raises(ConfigurationError):
            InlineValidator(lambda v: v.rule_for("Name", "not callable"))

    def test_validate_none_is_rejected(self, user_validator):
        with pytest.raises(ValueError):
            user_validator.validate(None)


class TestCollections:
    def test_rule_for_each_reports_index(self):
        validator = InlineValidator(lambda v: v.rule_for_each("Lines", lambda a: a.lines).not_empty())

        report = validator.validate(Address(lines=["a", "", "c", None]))

        assert [f.property_path for f in report.failures] == ["Lines[1]", "Lines[3]"]

    def test_none_collection_is_skipped(self):
        validator = InlineValidator(lambda v: v.rule_for_each("Lines", lambda a: a.lines).not_empty())

        assert validator.validate(Address(lines=None)).is_valid

    def test_child_rules_inline_validator(self):
        validator = InlineValidator(
            lambda v: v.rule_for_each("Orders", lambda u: u.orders).child_rules(
                lambda orders: orders.rule_for("Id", lambda o: o.id).greater_than(0)))

        report = validator.validate(User(orders=[Order(id=1), Order(id=0)]))

        assert [f.property_path for f in report.failures] == ["Orders[1].Id"]

    def test_duplicate_declarations_report_duplicate_failures(self, order_validator):
        def declare(v):
            v.rule_for_each("Orders", lambda u: u.orders).set_validator(order_validator)
            v.rule_for_each("Orders", lambda u: u.orders).child_rules(
                lambda orders: orders.rule_for("Id", lambda o: o.id).greater_than(0))

        validator = InlineValidator(declare)
        report = validator.validate(User(orders=[Order(id=0, address=Address(town="X"))]))

        assert [f.property_path for f in report.failures] == ["Orders[0].Id", "Orders[0].Id"]

    def test_collection_level_and_element_rules_coexist(self):
        validator = InlineValidator(
            lambda v: v.rule_for("Orders", lambda u: u.orders)
            .must(lambda orders: len(orders) <= 2).with_message("Only 2 orders are allowed")
            .cascade("continue")
            .for_each(lambda order: order.must(lambda o: o.id > 0).with_message(
                "Order {CollectionIndex} must have an id")))

        report = validator.validate(User(orders=[Order(id=1), Order(id=0), Order(id=3)]))

        assert report.to_string() == (
            "Orders: Only 2 orders are allowed\n"
            "Orders[1]: Order 1 must have an id"
        )

    def test_for_each_requires_rules(self):
        with pytest.raises(ConfigurationError):
            InlineValidator(lambda v: v.rule_for("Orders").for_each(lambda order: None))

    def test_shared_child_validator_instance(self, address_validator):
        def declare(v):
            v.rule_for("Home", lambda d: d["home"]).set_validator(address_validator)
            v.rule_for("Work", lambda d: d["work"]).set_validator(address_validator)

        validator = InlineValidator(declare)
        report = validator.validate({"home": Address(town=""), "work": Address(town="")})

        assert [f.property_path for f in report.failures] == ["Home.Town", "Work.Town"]


class TestInclude:
    def test_included_rules_run_on_same_instance(self):
        names = InlineValidator(lambda v: v.rule_for("Name", lambda u: u.name).not_null().length(0, 3))
        validator = InlineValidator(lambda v: v.include(names))

        report = validator.validate(User(name="Grace"))

        assert [(f.property_path, f.error_code) for f in report.failures] == [("Name", "LengthValidator")]

    def test_include_self_is_rejected(self):
        validator = Validator()
        with pytest.raises(ConfigurationError):
            validator.include(validator)

    def test_include_cycle_is_rejected(self):
        first = Validator(name="First")
        second = Validator(name="Second")
        second.include(first)

        with pytest.raises(ConfigurationError):
            first.include(second)

    def test_indirect_include_cycle_is_rejected(self):
        first, second, third = Validator(name="First"), Validator(name="Second"), Validator(name="Third")
        second.include(first)
        third.include(second)

        with pytest.raises(ConfigurationError):
            first.include(third)

    def test_shared_include_is_not_a_cycle(self):
        names = InlineValidator(lambda v: v.rule_for("Name", lambda u: u.name).not_null())
        first = InlineValidator(lambda v: v.include(names))
        second = InlineValidator(lambda v: v.include(names))
        validator = InlineValidator(lambda v: (v.include(first), v.include(second)))

        assert [f.property_path for f in validator.validate(User()).failures] == ["Name", "Name"]


def test_validator_is_not_mutated_by_validation(user_validator):
    chains_before = user_validator.chains

    user_validator.validate(valid_user(orders=[valid_order()]))
    user_validator.validate(valid_user(name=""))

    assert user_validator.chains == chains_before
