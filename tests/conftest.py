import pytest
from helix.transpiler.id import reset_id_counter


@pytest.fixture(autouse=True)
def _reset_ids():  # pyright: ignore[reportUnusedFunction]
	"""Generated identifiers (sig_1, p_1, ...) start from 1 in every test."""
	reset_id_counter()
	yield
	reset_id_counter()
