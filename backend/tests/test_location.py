from decimal import Decimal

from marketplace.models.location import City, Country, State
from marketplace.models.user import User
from marketplace.services.location_resolver import location_resolver


def test_coordinates_returned_when_both_present():
    user = User(latitude=Decimal("40.71280000"), longitude=Decimal("-74.00600000"))

    assert user.get_coordinates() == {"latitude": 40.7128, "longitude": -74.006}
    assert user.coordinates == user.get_coordinates()


def test_partial_coordinates_return_none():
    assert User(latitude=None, longitude=-74.0060).get_coordinates() is None
    assert User(latitude=40.7128, longitude=None).get_coordinates() is None
    assert User().get_coordinates() is None


def test_zero_coordinates_are_real_coordinates():
    assert location_resolver.coordinates(0.0, 6.5) == {"latitude": 0.0, "longitude": 6.5}
    assert location_resolver.coordinates(51.4779, 0) == {"latitude": 51.4779, "longitude": 0.0}


def test_display_override_wins():
    user = User(
        location_display="Brooklyn, NY",
        city=City(name="Paris"),
        state=State(name="Ile-de-France"),
        country=Country(name="France"),
    )

    assert user.get_full_location() == "Brooklyn, NY"
    assert user.full_location == "Brooklyn, NY"


def test_full_location_composed_city_state_country():
    user = User(city=City(name="Lyon"), state=State(name="Auvergne-Rhone-Alpes"), country=Country(name="France"))
    assert user.get_full_location() == "Lyon, Auvergne-Rhone-Alpes, France"


def test_full_location_skips_unset_parts():
    user = User(location_display="", city=City(name="Paris"), state=None, country=Country(name="France"))
    assert user.get_full_location() == "Paris, France"


def test_full_location_none_when_nothing_set():
    assert User().get_full_location() is None
    assert User(location_display="").get_full_location() is None


def test_full_location_from_database(seeded_db, create_user):
    france = Country(name="France", iso_code="FR")
    idf = State(name="Ile-de-France", country=france)
    paris = City(name="Paris", state=idf)
    seeded_db.add_all([france, idf, paris])
    seeded_db.commit()

    user = create_user(city_id=paris.id, country_id=france.id)
    seeded_db.expire_all()

    assert seeded_db.get(User, user.id).get_full_location() == "Paris, France"


def test_coordinates_from_database_keep_eight_digits(seeded_db, create_user):
    user = create_user(latitude=Decimal("48.85661400"), longitude=Decimal("2.35222190"))
    seeded_db.expire_all()

    coordinates = seeded_db.get(User, user.id).get_coordinates()
    assert coordinates == {"latitude": 48.856614, "longitude": 2.3522219}


def test_has_location_data():
    assert User(location_display="Somewhere").has_location_data()
    assert User(location_data={"place": "x"}).has_location_data()
    assert not User(location_display="", location_data={}).has_location_data()
    assert not User().has_location_data()


def test_full_location_skips_empty_names():
    user = User(city=City(name=""), state=State(name=""), country=Country(name="France"))
    assert user.get_full_location() == "France"

    assert User(city=City(name=""), country=Country(name="")).get_full_location() is None
