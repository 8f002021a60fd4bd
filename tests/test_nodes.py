import pytest

from noise_engine import Combiner, Constant, Fractal, Modifier, Transformer


@pytest.mark.parametrize(
    "base, hook",
    [
        (Fractal, "_combine"),
        (Combiner, "_merge"),
        (Modifier, "_modify"),
        (Transformer, "_transform"),
    ],
)
def test_composite_hooks_are_abstract(base, hook) -> None:
    assert hook in base.__abstractmethods__

    class Incomplete(base):
        pass

    with pytest.raises(TypeError):
        if base is Fractal:
            Incomplete(octaves=1)
        elif base is Combiner:
            Incomplete(Constant(0.0), Constant(1.0))
        else:
            Incomplete(Constant(0.0))
