"""
Shared configuration and constants.
"""

import dataclasses

# PIP3 modules
import PIL.Image


DPI = 300
A4_WIDTH_INCHES = 8.27
A4_HEIGHT_INCHES = 11.69
MARGIN = 60.0
COLUMNS = 4

SHORT_CODE_MAX_LENGTH = 26

LINEAR_WIDTH_FRACTION = 0.9
LINEAR_HEIGHT_FRACTION = 0.45
LINEAR_TOP_OFFSET = 6
MATRIX_WIDTH_FRACTION = 0.75
MATRIX_HEIGHT_FRACTION = 0.6
MATRIX_TOP_OFFSET = 8

FOOTER_WIDTH_FRACTION = 0.16
FOOTER_MARGIN_FRACTION = 0.9
FOOTER_TOP_NUDGE = 4
FOOTER_TEXT_INSET = 10

TITLE_FONT_SIZE = 28.0
LABEL_FONT_SIZE = 13.0
DESCRIPTION_FONT_SIZE = 10.0
FOOTER_FONT_SIZE = 11.0
LINE_SPACING = 1.3
LABEL_GAP = 10
DESCRIPTION_GAP = 14
DESCRIPTION_PADDING = 8

CELL_BORDER_WIDTH = 1
CELL_BORDER_COLOR = (220, 220, 220)
TEXT_COLOR = (0, 0, 0)
BACKGROUND_COLOR = (255, 255, 255)

DEFAULT_FONT_REGULAR = "Vera.ttf"
DEFAULT_FONT_BOLD = "VeraBd.ttf"

TITLE = "Git Barcode Sheet – One Scan = One Command"
FOOTER_URL = "https://github.com/arran4/git-barcode-sheet"
DEFAULT_OUTPUT = "git-barcode-sheet-a4.png"

MODE_LINEAR = "linear"
MODE_MATRIX = "matrix"

PROGRESS_BAR_WIDTH = 20
PROGRESS_UPDATE_EVERY = 4


@dataclasses.dataclass(frozen=True)
class SheetConfig:
	dpi: int
	page_width_inches: float
	page_height_inches: float
	margin: float
	columns: int
	short_code_max_length: int
	title: str
	footer_url: str


@dataclasses.dataclass(frozen=True)
class PageGeometry:
	width: int
	height: int
	margin: float
	columns: int
	rows: int
	left: float
	top: float
	right: float
	bottom: float
	cell_width: float
	cell_height: float


@dataclasses.dataclass
class CellResult:
	index: int
	code: str
	label: str
	mode: str
	column: int
	row: int
	cell_box: tuple[float, float, float, float]
	symbol_box: tuple[int, int, int, int] | None = None
	stage: str | None = None
	reason: str | None = None

	@property
	def rendered(self) -> bool:
		return self.symbol_box is not None


@dataclasses.dataclass
class SheetResult:
	image: PIL.Image.Image
	geometry: PageGeometry
	cells: list[CellResult]
	footer_rendered: bool
	footer_reason: str | None = None

	@property
	def rendered_cells(self) -> int:
		return sum(1 for cell in self.cells if cell.rendered)

	@property
	def failed_cells(self) -> int:
		return sum(1 for cell in self.cells if not cell.rendered)


#============================================
def build_default_config() -> SheetConfig:
	"""
	Build the fixed sheet configuration.

	Returns:
		SheetConfig.
	"""
	return SheetConfig(
		dpi=DPI,
		page_width_inches=A4_WIDTH_INCHES,
		page_height_inches=A4_HEIGHT_INCHES,
		margin=MARGIN,
		columns=COLUMNS,
		short_code_max_length=SHORT_CODE_MAX_LENGTH,
		title=TITLE,
		footer_url=FOOTER_URL,
	)


#============================================
def inches_to_pixels(value: float, dpi: int) -> int:
	"""
	Convert inches to whole pixels, truncating.

	Args:
		value: Inches value.
		dpi: Dots per inch.

	Returns:
		Pixel count.
	"""
	return int(value * dpi)
