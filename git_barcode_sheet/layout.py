"""
Page geometry and per-cell layout math.
"""

# Standard Library
import math

# local repo modules
import git_barcode_sheet as gbs
import git_barcode_sheet.config


SheetConfig = gbs.config.SheetConfig
PageGeometry = gbs.config.PageGeometry

MODE_LINEAR = gbs.config.MODE_LINEAR
MODE_MATRIX = gbs.config.MODE_MATRIX
LINEAR_WIDTH_FRACTION = gbs.config.LINEAR_WIDTH_FRACTION
LINEAR_HEIGHT_FRACTION = gbs.config.LINEAR_HEIGHT_FRACTION
LINEAR_TOP_OFFSET = gbs.config.LINEAR_TOP_OFFSET
MATRIX_WIDTH_FRACTION = gbs.config.MATRIX_WIDTH_FRACTION
MATRIX_HEIGHT_FRACTION = gbs.config.MATRIX_HEIGHT_FRACTION
MATRIX_TOP_OFFSET = gbs.config.MATRIX_TOP_OFFSET
FOOTER_WIDTH_FRACTION = gbs.config.FOOTER_WIDTH_FRACTION
FOOTER_MARGIN_FRACTION = gbs.config.FOOTER_MARGIN_FRACTION
FOOTER_TOP_NUDGE = gbs.config.FOOTER_TOP_NUDGE


#============================================
def compute_rows(count: int, columns: int) -> int:
	"""
	Compute the row count needed for a number of entries.

	Args:
		count: Number of entries.
		columns: Column count.

	Returns:
		ceil(count / columns).
	"""
	if columns <= 0:
		raise ValueError(f"columns must be positive, got {columns}")
	return int(math.ceil(count / columns))


#============================================
def compute_page_geometry(config: SheetConfig, count: int) -> PageGeometry:
	"""
	Compute page pixel size and the uniform grid between the margins.

	Args:
		config: Sheet configuration.
		count: Number of commands on the sheet.

	Returns:
		PageGeometry.
	"""
	width = gbs.config.inches_to_pixels(config.page_width_inches, config.dpi)
	height = gbs.config.inches_to_pixels(config.page_height_inches, config.dpi)
	rows = compute_rows(count, config.columns)

	left = config.margin
	top = config.margin
	right = float(width) - config.margin
	bottom = float(height) - config.margin

	cell_width = (right - left) / config.columns
	cell_height = (bottom - top) / rows if rows > 0 else 0.0

	return PageGeometry(
		width=width,
		height=height,
		margin=config.margin,
		columns=config.columns,
		rows=rows,
		left=left,
		top=top,
		right=right,
		bottom=bottom,
		cell_width=cell_width,
		cell_height=cell_height,
	)


#============================================
def cell_position(index: int, columns: int) -> tuple[int, int]:
	"""
	Map a flat index to (column, row) in row-major order.
	"""
	return (index % columns, index // columns)


#============================================
def compute_cell_box(geometry: PageGeometry, index: int) -> tuple[float, float, float, float]:
	"""
	Compute the rectangle for a cell.

	Args:
		geometry: Page geometry.
		index: Flat command index.

	Returns:
		Tuple of (x0, y0, x1, y1) in pixels, y growing downward.
	"""
	col, row = cell_position(index, geometry.columns)
	x0 = geometry.left + col * geometry.cell_width
	y0 = geometry.top + row * geometry.cell_height
	return (x0, y0, x0 + geometry.cell_width, y0 + geometry.cell_height)


#============================================
def select_mode(code: str, max_linear_length: int) -> str:
	"""
	Pick the symbology for a code by its length.

	Args:
		code: Text to encode.
		max_linear_length: Longest code still drawn as a linear barcode.

	Returns:
		MODE_LINEAR or MODE_MATRIX.
	"""
	if len(code) <= max_linear_length:
		return MODE_LINEAR
	return MODE_MATRIX


#============================================
def compute_symbol_size(geometry: PageGeometry, mode: str) -> tuple[int, int]:
	"""
	Compute the target symbol size inside one cell.

	Args:
		geometry: Page geometry.
		mode: MODE_LINEAR or MODE_MATRIX.

	Returns:
		Tuple of (width, height) in pixels.
	"""
	if mode == MODE_LINEAR:
		width = int(geometry.cell_width * LINEAR_WIDTH_FRACTION)
		height = int(geometry.cell_height * LINEAR_HEIGHT_FRACTION)
		return (width, height)
	if mode == MODE_MATRIX:
		size = int(min(
			geometry.cell_width * MATRIX_WIDTH_FRACTION,
			geometry.cell_height * MATRIX_HEIGHT_FRACTION,
		))
		return (size, size)
	raise ValueError(f"unknown mode: {mode}")


#============================================
def symbol_top_offset(mode: str) -> int:
	"""
	Distance from the cell top to the symbol top.
	"""
	if mode == MODE_LINEAR:
		return LINEAR_TOP_OFFSET
	return MATRIX_TOP_OFFSET


#============================================
def compute_footer_size(geometry: PageGeometry) -> int:
	"""
	Compute the footer QR side so it stays inside the bottom margin.

	Args:
		geometry: Page geometry.

	Returns:
		Side length in pixels.
	"""
	return int(min(
		geometry.width * FOOTER_WIDTH_FRACTION,
		geometry.margin * FOOTER_MARGIN_FRACTION,
	))


#============================================
def compute_footer_origin(geometry: PageGeometry, symbol_width: int, size: int) -> tuple[int, int]:
	"""
	Compute the top-left corner of the footer symbol.

	Args:
		geometry: Page geometry.
		symbol_width: Width of the scaled footer image.
		size: Requested footer side length.

	Returns:
		Tuple of (x, y) in pixels.
	"""
	x = geometry.width / 2.0 - symbol_width / 2.0
	y = geometry.height - geometry.margin - size + FOOTER_TOP_NUDGE
	return (int(x), int(y))
