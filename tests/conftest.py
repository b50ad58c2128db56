"""
Shared key pairs for the test suite.

Key generation is slow, so each pair is generated once per session.
"""

import pytest

from rsamsg_crypto import generate_keypair

TEST_KEY_LENGTH = 3072
PLAINTEXT = "Hello this is a test message with runes♡♡♡♡"


@pytest.fixture(scope="session")
def keypair():
    return generate_keypair(TEST_KEY_LENGTH)


@pytest.fixture(scope="session")
def other_keypair():
    return generate_keypair(TEST_KEY_LENGTH)


@pytest.fixture(scope="session")
def small_keypair():
    return generate_keypair(512)


@pytest.fixture(scope="session")
def other_small_keypair():
    return generate_keypair(512)


@pytest.fixture
def plaintext():
    return PLAINTEXT
