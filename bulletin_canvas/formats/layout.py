"""
CanvasLayout - Pydantic model for a bulletin's canvas layout and its JSON I/O.

A layout belongs to exactly one bulletin issue and is persisted as a single
JSON document, replaced wholesale on save:
{
    "pages": [
        {
            "id": "uuid",
            "pageNumber": 1,
            "blocks": [
                {"id", "type", "x", "y", "width", "height",
                 "rotation", "zIndex", "data"}
            ]
        }
    ]
}

Example usage:
    # Load from file
    layout = CanvasLayout.load('bulletin-canvas.json')

    # Save to file
    layout.save('bulletin-canvas.json')

    # Round-trip through the API shape
    same = CanvasLayout.from_api_dict(layout.to_api_dict())
"""

import json
from pathlib import Path
from typing import Any, Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from bulletin_canvas.blocks import CanvasBlock, CanvasPage


class CanvasLayout(BaseModel):
    """Ordered pages of one bulletin issue."""

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=False,
        extra='ignore',
    )

    pages: list[CanvasPage] = Field(default_factory=list)

    @model_validator(mode='after')
    def _check_unique_page_numbers(self) -> 'CanvasLayout':
        seen = set()
        for page in self.pages:
            if page.page_number in seen:
                raise ValueError(f"Duplicate pageNumber {page.page_number}")
            seen.add(page.page_number)
        return self

    # --- Lookup ---

    def get_page(self, page_number: int) -> Optional[CanvasPage]:
        """Get a page by its page number."""
        for page in self.pages:
            if page.page_number == page_number:
                return page
        return None

    def find_block(self, block_id: str) -> Optional[tuple[CanvasPage, CanvasBlock]]:
        """
        Find a block anywhere in the layout.

        Args:
            block_id: Block ID to find

        Returns:
            (page, block) or None if not found
        """
        for page in self.pages:
            block = page.get_block(block_id)
            if block is not None:
                return page, block
        return None

    def iter_blocks(self) -> Iterator[tuple[CanvasPage, CanvasBlock]]:
        for page in self.pages:
            for block in page.blocks:
                yield page, block

    def block_count(self) -> int:
        return sum(len(page.blocks) for page in self.pages)

    # --- Serialization ---

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to the persisted JSON shape (camelCase keys)."""
        return self.model_dump(by_alias=True, mode='json')

    @classmethod
    def from_api_dict(cls, data: dict[str, Any]) -> 'CanvasLayout':
        """
        Create a layout from the persisted JSON shape.

        Accepts both camelCase (JSON) and snake_case (Python) keys. An empty
        dict (a bulletin that never had a canvas) yields a layout without pages.

        Raises:
            pydantic.ValidationError: If a block or page breaks an invariant
        """
        return cls.model_validate(data or {})

    def to_json(self, *, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_api_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> 'CanvasLayout':
        return cls.from_api_dict(json.loads(text))

    # --- File I/O ---

    def save(self, path: Union[str, Path]) -> None:
        """Write the whole layout to ``path``, replacing any previous content."""
        path = Path(path)
        tmp_path = path.with_name(path.name + '.tmp')
        tmp_path.write_text(self.to_json(indent=2), encoding='utf-8')
        tmp_path.replace(path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'CanvasLayout':
        """
        Load a layout from a JSON file.

        Raises:
            ValueError: If the file is not a layout document
        """
        data = json.loads(Path(path).read_text(encoding='utf-8'))
        if not isinstance(data, dict):
            raise ValueError('Invalid layout file: expected a JSON object')
        return cls.from_api_dict(data)


def create_empty_layout(page_count: int = 4) -> CanvasLayout:
    """Layout with ``page_count`` blank pages numbered from 1."""
    return CanvasLayout(pages=[CanvasPage(page_number=n) for n in range(1, page_count + 1)])
