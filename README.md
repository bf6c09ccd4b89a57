# smartroad

A simulation of a four-way intersection where cars work out among
themselves who goes first. A car comes from one of the four approaches
and takes one of three routes: a right turn, straight ahead or a left
turn. The cars test their hit boxes against each other with a
separating-axis test. They settle right of way through shared reference
points inside the junction, and the number of lanes that may be in the
intersection at the same time is limited. Traffic keeps moving without
crashes.

## Installing

```
pip install .
```

The window is drawn with pygame.

## Running

```
smartroad
```

The simulation loads two images, `map.png` (the intersection background)
and `car.png` (the car sprite). By default it looks for them in an
`assets` directory under the current directory. You can point it at
another directory:

```
smartroad --assets path/to/images
```

It also needs a TrueType font for the statistics screen. It tries Arial
on Windows, then Arial on macOS, then DejaVu Sans on Linux. If an image
or the font cannot be loaded, the command prints the error and exits
with status 1.

Controls while the simulation runs:

| Key          | Action                                   |
|--------------|------------------------------------------|
| Up           | spawn a car coming from the north        |
| Down         | spawn a car coming from the south        |
| Right        | spawn a car coming from the east         |
| Left         | spawn a car coming from the west         |
| R            | spawn a car from a random direction      |
| Esc          | show the statistics screen               |
| Esc (again)  | quit                                     |

Each car spawned from the keyboard gets a random route. After a spawn
you must wait 0.8 seconds before the next one. A spawn is refused when
a car of the same lane class still covers the entry point. Closing the
window also quits.

## Statistics

After the first Esc the simulation stops and shows:

- the total number of cars spawned,
- the highest speed any car moved at,
- the minimum speed, which is always 0.00 because cars come to a stop,
- the longest and shortest time a car took to get through, in seconds
  (the shortest is 0.00 if no car has finished yet),
- the number of close calls, counted each time a car yields to another.

## Using the pieces directly

The simulation logic runs without a window. This is handy for
experiments and tests:

```python
from smartroad.game import Game
from smartroad.types import Direction, Route

game = Game()
game.spawn_car(Direction.NORTH, Route.STRAIGHT)
for _ in range(60):
    game.update(1 / 60)
print(game.stats)
```

`Game` takes optional keyword arguments:

- `spawn_cooldown`, in seconds,
- `clock`, a function returning the current time in seconds,
- `rng`, a `random.Random`.

`Game.handle_key` turns a pygame key code into a spawn and respects the
cooldown. `Game.handle_events` processes a sequence of pygame events.

The rest of the package is split as follows:

- `smartroad.types`: the enums (`AppState`, `Direction`, `Route`,
  `CollisionType`), `Vec2`, `Car` and `Stats`.
- `smartroad.collision`: the hit-box geometry (`compute_rotated_corners`,
  `sat_collision`, `contains_point`) and the right-of-way logic
  (`get_reference_point`, `build_car_tracking`, `check_collision`,
  `check_spawn_collision`), working on `CarSnapshot` tuples.
- `smartroad.movement`: moves a single car along its route for one
  frame with `move_straight`, `move_right` and `move_left`.
- `smartroad.renderer`: draws onto pygame surfaces with `render_game`
  and `render_stats`. `stats_lines` gives the text of the statistics
  screen, and `GameTextures.load` loads the images.

## What it does not do

- No images or fonts are shipped. You must provide `map.png` and
  `car.png` yourself.
- There is no pause. `AppState.PAUSED` exists, but nothing switches to it.
- Once the statistics screen is shown, the simulation cannot be resumed.

## Tests

```
pip install .[test]
pytest
```