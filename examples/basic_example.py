"""Basic example of packing and unpacking an animation set."""

import os
import tempfile

from animizer import Frame, Animation, encode, decode
from animizer.io import image_table
from animizer.model import total_duration, frame_index_at


def main():
    """Write a two-animation set next to its sprite sheets and read it back."""
    workdir = tempfile.mkdtemp()
    sheet = os.path.join(workdir, "sprites", "hero.png")

    # Four walk frames on one row of the sheet, 4/60 s each
    walk = Animation("walk", [
        Frame(8 + 16 * i, 8, 16, 16, 4, 60, sheet) for i in range(4)
    ])
    idle = Animation("idle", [
        Frame(8, 24, 16, 16, 30, 60, sheet),
        Frame(24, 24, 16, 16, 10, 60, sheet),
    ])
    anims = {"walk": walk, "idle": idle}

    path = encode(anims, workdir, "hero")
    print(f"Wrote {path}")
    with open(path) as f:
        print(f.read())

    loaded = decode(workdir, "hero.animset")
    print(f"Images: {image_table(loaded)}")
    for name, anim in loaded.items():
        print(f"{name}: {len(anim.frames)} frames, {total_duration(anim):.3f}s")

    print(f"walk frame at t=0.1s: {frame_index_at(loaded['walk'], 0.1)}")
    print("Round trip equal:", loaded == anims)


if __name__ == "__main__":
    main()
