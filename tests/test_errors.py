import pytest

from patkit.errors import AbortError, abort_if


@pytest.mark.parametrize("condition", [True, 1, "x", [0]])
def test_truthy_condition_raises_with_message(condition):
    with pytest.raises(AbortError) as info:
        abort_if(condition, "pat match missing arguments")
    assert info.value.message == "pat match missing arguments"
    assert str(info.value) == "pat match missing arguments"


def test_falsy_conditions_return_quietly():
    results = [abort_if(c, "never") for c in (False, 0, "", None, [])]
    assert results == [None] * 5


def test_abort_error_is_catchable_as_runtime_error():
    with pytest.raises(RuntimeError, match="boom"):
        abort_if(True, "boom")