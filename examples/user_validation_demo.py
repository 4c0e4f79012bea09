#!/usr/bin/env python3
"""
User / Order / Address validation demo.

Demonstrates the declaration styles supported by the engine:
1. Simple property rules with custom messages and display names
2. Nested objects via set_validator() and dot-notation properties
3. Collections via rule_for_each(), child_rules() and for_each()
4. Conditional rules with when()
5. Custom rules as free-function extensions and registered predicates
6. include() and rule sets
7. Localized messages through the language manager

Usage:
    python examples/user_validation_demo.py
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fluentrules import LanguageManager, Validator, register_predicate
from fluentrules.core.options import ValidatorOptions
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class Address:
    lines: List[Optional[str]] = field(default_factory=list)
    town: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None


@dataclass
class Order:
    id: int = 0
    name: Optional[str] = None
    address: Optional[Address] = None


@dataclass
class User:
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    age: Optional[int] = None
    orders: Optional[List[Order]] = None


@register_predicate(
    "list_must_contain_fewer_than",
    "The list contains too many items",
    params=("MaxCount",),
)
def list_must_contain_fewer_than(value, context, max_count):
    return value is None or len(value) < max_count


def at_most(builder, count):
    """Free-function extension: collection holds at most ``count`` items."""
    return builder.must(lambda items: len(items) <= count).with_message(f"Only {count} orders are allowed")


class AddressValidator(Validator):
    def __init__(self):
        super().__init__()
        self.rule_for_each("Lines", lambda a: a.lines).not_null()
        # {CollectionIndex} tells which line is missing
        self.rule_for_each("Lines", lambda a: a.lines).not_null().with_message(
            "Address {CollectionIndex} is required.")
        self.rule_for("Town", lambda a: a.town).not_empty()


class OrderValidator(Validator):
    def __init__(self):
        super().__init__()
        self.rule_for("Id", lambda o: o.id).not_empty().greater_than(0).cascade("continue")
        self.rule_for("Name", lambda o: o.name).not_null()
        # Nested object through a child validator
        self.rule_for("Address", lambda o: o.address).set_validator(AddressValidator())
        # Nested member directly; None-safe, but only meaningful with an address
        self.rule_for("Address.Town", lambda o: o.address.town).not_empty().when(
            lambda order: order.address is not None)


class NameValidator(Validator):
    def __init__(self):
        super().__init__()
        self.rule_for("Name", lambda u: u.name).not_null().length(0, 255)


class UserValidator(Validator):
    def __init__(self):
        super().__init__()
        self.rule_for("Name", lambda u: u.name).not_empty().with_message("Name can not be empty!")
        self.rule_for("Email", lambda u: u.email).not_empty()
        self.rule_for("Password", lambda u: u.password).not_empty()
        self.rule_for("Age", lambda u: u.age).less_than(100).greater_than(5)

        # Collection of complex type: child validator and inline child rules
        self.rule_for_each("Orders", lambda u: u.orders).set_validator(OrderValidator())
        self.rule_for_each("Orders", lambda u: u.orders).child_rules(
            lambda orders: orders.rule_for("Id", lambda o: o.id).greater_than(0))

        # Collection-level business rule plus per-element rule on the same chain
        self.rule_for("Orders", lambda u: u.orders).not_null().apply(at_most, 10).for_each(
            lambda order: order.must(lambda o: o.id > 0).with_message(
                "Orders must have a total of more than 0"))

        self.rule_for("Name", lambda u: u.name).not_null().with_name("Full name")
        self.rule_for("Orders", lambda u: u.orders).list_must_contain_fewer_than(10)
        self.include(NameValidator())

        self.rule_set("NameRuleset", lambda: self.rule_for("Name", lambda u: u.name).not_empty())


def main() -> None:
    validator = UserValidator()
    user = User(
        name="",
        email="a@b.com",
        password="x",
        age=3,
        orders=[Order(id=0, name="first"), Order(id=2, name="second", address=Address(lines=["Main St", None]))],
    )

    logger.info("=" * 60)
    logger.info("DEFAULT RULES")
    logger.info("=" * 60)
    report = validator.validate(user)
    for line in report.to_string().splitlines():
        logger.info(line)

    logger.info("=" * 60)
    logger.info("NameRuleset ONLY")
    logger.info("=" * 60)
    logger.info(validator.validate(user, rule_sets="NameRuleset").to_string())

    logger.info("=" * 60)
    logger.info("TURKISH MESSAGES")
    logger.info("=" * 60)
    languages = LanguageManager({
        "tr": {
            "NotEmptyValidator": "'{PropertyName}' boş olmamalıdır.",
            "GreaterThanValidator": "'{PropertyName}', '{ComparisonValue}' değerinden büyük olmalıdır.",
        }
    })
    options = ValidatorOptions(culture="tr", language_manager=languages)
    logger.info(validator.validate(user, options=options).to_string())


if __name__ == "__main__":
    main()
