import itertools
import textwrap

import pytest


BUILDING_MD = textwrap.dedent("""\
    # 221B Baker Street (building)

    -   House Number: 221b

    ## Sherlock (occupant)

    -   Forename: Sherlock
    -   Surname: Holmes

    ## Watson (occupant)

    -   Forename: John
    -   Surname: Watson
""")

EPISODES_MD = textwrap.dedent("""\
    # Episode 1 (episode)

    -   Title: Pilot
    -   Runtime: 42

    # Episode 1 (episode)

    -   Runtime: 45
    -   Aired: 1
""")

CREW_MD = textwrap.dedent("""\
    # Alice (person)

    -   Age: 34

    # Bob (person)

    -   Age: 29

    # Voyager (ship)

    -   Captain: {Alice}
    -   Pilot: {Bob}
""")


@pytest.fixture
def sequential_ids():
    """Identifier factory yielding id-1, id-2, ... in call order."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def building_md():
    return BUILDING_MD


@pytest.fixture
def episodes_md():
    return EPISODES_MD


@pytest.fixture
def crew_md():
    return CREW_MD
