"""
End-to-end scenarios for the User / Order / Address validators.
"""

from sample_models import Address, Order, User, valid_order, valid_user


def test_valid_user_has_no_failures(user_validator):
    user = valid_user(orders=[valid_order(1), valid_order(2)])

    report = user_validator.validate(user)

    assert report.is_valid
    assert report.failures == ()
    assert report.to_string() == ""


def test_empty_name_uses_custom_message(user_validator):
    user = User(name="", email="a@b.com", password="x", age=30, orders=[])

    report = user_validator.validate(user)

    assert len(report.failures) == 1
    failure = report.failures[0]
    assert failure.property_path == "Name"
    assert failure.message == "Name can not be empty!"
    assert failure.error_code == "NotEmptyValidator"
    assert failure.attempted_value == ""
    assert report.to_string() == "Name: Name can not be empty!"


def test_age_below_lower_bound(user_validator):
    user = User(name="A", email="a@b.com", password="x", age=3, orders=[])

    report = user_validator.validate(user)

    assert len(report.failures) == 1
    failure = report.failures[0]
    assert failure.property_path == "Age"
    assert failure.error_code == "GreaterThanValidator"
    assert failure.message == "'Age' must be greater than '5'."
    assert failure.attempted_value == 3


def test_too_many_orders(user_validator):
    user = valid_user(orders=[valid_order(i) for i in range(1, 12)])

    report = user_validator.validate(user)

    assert len(report.failures) == 1
    assert report.failures[0].property_path == "Orders"
    assert report.failures[0].message == "Only 10 orders are allowed"
    assert report.to_string() == "Orders: Only 10 orders are allowed"


def test_order_without_id_and_address(user_validator):
    user = valid_user(orders=[Order(id=0, address=None)])

    report = user_validator.validate(user)

    assert [(f.property_path, f.error_code) for f in report.failures] == [
        ("Orders[0].Id", "GreaterThanValidator"),
        ("Orders[0].Address", "NotNullValidator"),
    ]
    assert report.failures[1].message == "'Address' must not be empty."


def test_only_invalid_element_is_reported(user_validator):
    orders = [valid_order(1), Order(id=-4, name="bad", address=Address(town="X")), valid_order(3)]

    report = user_validator.validate(valid_user(orders=orders))

    assert len(report.failures) == 1
    assert report.failures[0].property_path == "Orders[1].Id"
    assert report.failures[0].attempted_value == -4


def test_nested_collection_index_in_message(user_validator):
    address = Address(lines=["1 Main St", None], town="Kadikoy")
    user = valid_user(orders=[Order(id=1, address=address)])

    report = user_validator.validate(user)

    assert report.to_string() == "Orders[0].Address.Lines[1]: Address 1 is required."


def test_validate_is_idempotent(user_validator):
    user = User(name="", email="", password=None, age=200, orders=[Order(id=0)])

    first = user_validator.validate(user)
    second = user_validator.validate(user)

    assert first == second
    assert first.to_string() == second.to_string()
    assert len(first.failures) == 6


def test_collect_everything_in_order(user_validator):
    user = User(name="", email="", password=None, age=200, orders=[Order(id=0)])

    report = user_validator.validate(user)

    assert [f.property_path for f in report.failures] == [
        "Name",
        "Email",
        "Password",
        "Age",
        "Orders[0].Id",
        "Orders[0].Address",
    ]


def test_shared_validator_across_threads(user_validator):
    from concurrent.futures import ThreadPoolExecutor

    users = [
        valid_user(orders=[valid_order(1)]),
        User(name="", email="a@b.com", password="x", age=30, orders=[]),
        valid_user(orders=[Order(id=0, address=None)]),
    ] * 20
    expected = [user_validator.validate(user).to_string() for user in users]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda user: user_validator.validate(user).to_string(), users))

    assert results == expected
