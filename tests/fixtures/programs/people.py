"""Host values and programs used by the CLI tests."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel

from json_assertions import all_of, assert_equal_to, finalize, key, nth


class Address(BaseModel):
    city: str
    postcode: str


class Person(BaseModel):
    name: str
    age: int
    tags: list[str]
    address: Address


ALICE = Person(
    name="Alice",
    age=42,
    tags=["admin", "ops"],
    address=Address(city="Leeds", postcode="LS1 4AP"),
)

PERSON_PROGRAM = all_of(
    finalize(key("name", lambda person: person.name).bind(assert_equal_to)),
    finalize(key("age", lambda person: person.age).bind(assert_equal_to)),
    finalize(
        key("tags", lambda person: person.tags)
        .then(nth(1, lambda tags: tags[1]))
        .bind(assert_equal_to)
    ),
    finalize(
        key("address", lambda person: person.address, shape=Address)
        .then(key("city", lambda address: address.city))
        .bind(assert_equal_to)
    ),
)

NOT_A_PROGRAM = 3


@dataclass
class Contact:
    name: str
    age: int
    tags: list[str]
    address: dict[str, str]


UNVERIFIED_CONTACT = Contact(
    name="Alice",
    age=42,
    tags=["admin", "ops"],
    address={"city": "Leeds", "postcode": "LS1 4AP"},
)
