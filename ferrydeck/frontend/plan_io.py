"""Export the rendered deck plan as a PNG.

The image carries the snapshot JSON in a PNG tEXt chunk (key:
``ferrydeck_snapshot``) so a shared picture still records exactly which load
it shows. ``read_plan_metadata`` reads it back for inspection; the app never
re-loads state from an export.

Used by ``app.py`` for its Export button.
"""

import json

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from ..engine.types import LoadSnapshot

METADATA_KEY = "ferrydeck_snapshot"


def save_plan_png(img: Image.Image, snapshot: LoadSnapshot, path: str) -> None:
    """Save a rendered plan with the snapshot JSON embedded."""
    info = PngInfo()
    info.add_text(METADATA_KEY, json.dumps(snapshot.to_dict()))
    img.save(path, pnginfo=info)


def read_plan_metadata(path: str) -> dict:
    """Return the snapshot dict embedded in an exported plan.

    Raises ValueError if the PNG has no snapshot metadata.
    """
    with Image.open(path) as img:
        text_data = getattr(img, "text", None)
        if not text_data or METADATA_KEY not in text_data:
            raise ValueError(
                "PNG file does not contain plan metadata "
                f"(missing '{METADATA_KEY}' chunk)"
            )
        return json.loads(text_data[METADATA_KEY])
