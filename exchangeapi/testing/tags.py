# This file declares the test category markers and collects the tags carried by a test.
# A tag placed on a test class applies to every test collected from that class and its subclasses.

from __future__ import annotations

from exchangeapi.markers import MarkerDefinition, MarkerRegistry, Retention, Target, query

TAG_ROLE = "tag"

TEST_TAGS = MarkerRegistry("test-tags")


def declare_tag(name: str) -> MarkerDefinition:
    """Declare a runtime-retained category marker usable on test functions and test classes."""

    return TEST_TAGS.declare(
        name,
        targets={Target.METHOD, Target.TYPE},
        retention=Retention.RUNTIME,
        meta={TAG_ROLE},
    )


AdminStatusTest = declare_tag("AdminStatusTest")

TEST_TAGS.freeze()


def collect_tags(test_function: object | None, test_class: type | None = None) -> frozenset[str]:
    """Return the names of every tag on the test function and on its class hierarchy."""

    found = set()
    if test_function is not None:
        found.update(query(test_function))
    if test_class is not None:
        found.update(query(test_class, inherited=True))
    return frozenset(marker.name for marker in found if TAG_ROLE in marker.meta)
