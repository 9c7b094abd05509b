import pytest

from builders import make_sample_program, make_services


@pytest.fixture
def services():
    return make_services()


@pytest.fixture
def program():
    return make_sample_program()
