from dataclasses import dataclass, field
from html import escape
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union


@dataclass
class Fragment:
    """
    A small tree of styled boxes that a host table embeds into a cell.

    Children are either nested fragments or plain text. Styles are CSS
    property names mapped to values and are emitted inline.
    """

    tag: str = "div"
    classes: Tuple[str, ...] = ()
    style: Dict[str, Any] = field(default_factory=dict)
    children: List[Union["Fragment", str]] = field(default_factory=list)
    attrs: Dict[str, str] = field(default_factory=dict)

    def walk(self) -> Iterator["Fragment"]:
        """Yields this fragment and every nested fragment, depth first."""
        yield self
        for child in self.children:
            if isinstance(child, Fragment):
                yield from child.walk()

    def find(self, class_name: str) -> Optional["Fragment"]:
        """First fragment in the tree carrying ``class_name``, or None."""
        return next((f for f in self.walk() if class_name in f.classes), None)

    def find_all(self, class_name: str) -> List["Fragment"]:
        return [f for f in self.walk() if class_name in f.classes]

    @property
    def text(self) -> str:
        """Concatenated text content of the tree."""
        return "".join(
            child.text if isinstance(child, Fragment) else str(child)
            for child in self.children
        )

    def to_html(self) -> str:
        parts = [self.tag]
        if self.classes:
            parts.append(f'class="{escape(" ".join(self.classes))}"')
        if self.style:
            css = "; ".join(f"{key}: {value}" for key, value in self.style.items())
            parts.append(f'style="{escape(css)}"')
        for key, value in self.attrs.items():
            parts.append(f'{key}="{escape(str(value))}"')
        inner = "".join(
            child.to_html() if isinstance(child, Fragment) else escape(str(child))
            for child in self.children
        )
        return f"<{' '.join(parts)}>{inner}</{self.tag}>"

    def _repr_html_(self) -> str:
        return self.to_html()

    def __str__(self) -> str:
        return self.to_html()
