# tagkit

Building blocks for marker detection code:

- **PCG random number generators** (`tagkit.engine`, `tagkit.extended`):
  the PCG family with 32-, 64- and 128-bit state. It has single-stream,
  settable-stream, unique-stream and MCG variants, jump-ahead and jump-back,
  the distance between two generators and a text form for saving and
  loading. It also has extended generators that pair a base engine with a
  table of extra values.
- **Output functions and constants** (`tagkit.output`): XSH RS, XSH RR, RXS,
  RXS M XS (and its inverse), RXS M, XSL RR, XSL RR RR, XSH and XSL, for
  widths of 8, 16, 32, 64 and 128 bits, with the matching LCG multipliers
  and increments.
- **Bit helpers** (`tagkit.bits`, `tagkit.extras`): floor and ceiling log2,
  trailing zeros, carry arithmetic, rotations, xorshift inversion,
  seed-sequence helpers, unbiased bounded draws, shuffling and decimal
  parsing of fixed-width integers.
- **Conditioning** (`tagkit.conditioner`): 3×3 normalisation matrices built
  from an ellipse or from image dimensions, and their use on 2-D points.
- **Utilities**: per-probe timing (`tagkit.logtime`), a global talk switch
  (`tagkit.talk`) and a singleton base class (`tagkit.singleton`).

## Install

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Random numbers

```python
from tagkit.engine import pcg32
from tagkit.extras import bounded_rand, shuffle

rng = pcg32(42, 54)
first = rng()              # 32-bit unsigned integer
die = rng(6)               # unbiased value in [0, 6)

rng.advance(1000)          # jump ahead
rng.backstep(1000)         # and back again

saved = str(rng)           # "multiplier increment state"
other = pcg32()
other.load(saved)
assert other == rng

deck = list(range(52))
shuffle(deck, rng)
```

Other generators are `pcg32_oneseq`, `pcg32_unique`, `pcg32_fast`, `pcg64`,
`pcg64_oneseq`, `pcg64_unique`, `pcg64_fast`, `pcg32_once_insecure`,
`pcg64_once_insecure`, `pcg128_once_insecure`, `pcg32_oneseq_once_insecure`
and `pcg64_oneseq_once_insecure`. Any of them can also be seeded from an
object with a `generate(count)` method, such as `tagkit.extras.SeedSeqFrom`.

Subtracting one engine from another of the same kind (`a - b`) gives the
number of steps between them; `distance(new_state)` gives the steps from the
current state to another one.

The extended generators are in `tagkit.extended`: `pcg32_k2`,
`pcg32_k2_fast`, `pcg32_k64`, `pcg32_c64`, `pcg64_k32` and `pcg64_c32`.
Each output of the base engine is xored with an entry of a table that is
itself stepped as the base engine goes round. `ExtendedEngine.set(wanted)`
makes the current step produce a chosen value. Only the variants whose table
is indexed by the low state bits (the `k` ones) support `advance` and
`backstep`.

## Conditioning points

```python
import numpy as np
from tagkit.conditioner import conditioner_from_image, condition_all

trans, inv_trans = conditioner_from_image(640, 480, 500)
points = np.array([[320.0, 240.0], [0.0, 0.0]])
normalised = condition_all(points, trans)
restored = condition_all(normalised, inv_trans)
```

`conditioner_from_ellipse(center, a, b)` builds the matrix that moves an
ellipse's centre to the origin and scales by sqrt(2) over its mean
semi-axis. `condition(point, transformation)` takes a 2- or 3-element point
and returns a new array.

## Timing

```python
import sys
from tagkit.logtime import Mgmt

timer = Mgmt(10)           # ten probe slots
timer.reset_start_time()
# ... work ...
timer.log("detect")
timer.write(sys.stdout)    # "(0) detect: 2ms"
```

Each call to `log` fills the next slot with the time since the previous
checkpoint; once all slots are used, further calls are ignored until
`reset_start_time`. Repeated rounds average into the same slots.

## Talk switch and singletons

```python
from tagkit.talk import set_talk, talk
from tagkit.singleton import Singleton

set_talk(False)
talk("quiet now")          # writes nothing, returns False

class Registry(Singleton):
    pass

assert Registry.instance() is Registry.instance()
Registry.destroy()         # the next instance() call creates a new one
```

## What is not included

The package has no exception hierarchy of its own: errors are raised as
Python's built-in exceptions (`ValueError`, `TypeError`, `OverflowError`,
`ZeroDivisionError`, `IndexError`). It does no marker detection, image
handling or drawing itself, and it has no command-line program.