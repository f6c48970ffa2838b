"""Display interface template models for devices with screens."""

from pydantic import BaseModel, Field


class DisplayImageSource(BaseModel):
    """Source URL and size for one rendition of an image."""

    url: str
    size: str | None = None
    widthPixels: int = 0
    heightPixels: int = 0


class DisplayImageObject(BaseModel):
    """Image with one or more sources."""

    contentDescription: str | None = None
    sources: list[DisplayImageSource] = Field(default_factory=list)

    def add_image_source(
        self,
        size: str | None,
        url: str,
        height_pixels: int = 0,
        width_pixels: int = 0,
    ) -> DisplayImageSource:
        """Append a source for the given size and return it."""
        source = DisplayImageSource(
            url=url,
            size=size or None,
            heightPixels=height_pixels,
            widthPixels=width_pixels,
        )
        self.sources.append(source)
        return source


class DisplayTextContent(BaseModel):
    """Text shown by a template; type is PlainText or RichText."""

    type: str = "PlainText"
    text: str


class TextContent(BaseModel):
    """Primary, secondary and tertiary text of a template or list item."""

    primaryText: DisplayTextContent
    secondaryText: DisplayTextContent | None = None
    tertiaryText: DisplayTextContent | None = None


class DisplayListItem(BaseModel):
    """Entry of a ListTemplate."""

    token: str
    textContent: TextContent | None = None
    image: DisplayImageObject | None = None


class DisplayTemplate(BaseModel):
    """BodyTemplate* or ListTemplate* to render."""

    type: str
    token: str
    backButton: str | None = None  # VISIBLE or HIDDEN
    backgroundImage: DisplayImageObject | None = None
    title: str | None = None
    textContent: TextContent | None = None
    listItems: list[DisplayListItem] | None = None
