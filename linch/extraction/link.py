from dataclasses import dataclass


@dataclass(frozen=True)
class Link:
    """A URL found in a source file"""
    url: str
    path: str

    def __str__(self) -> str:
        return self.url
