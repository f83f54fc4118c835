"""
Rendering of the sheet canvas and its outputs.
"""

# Standard Library
import json
import pathlib
import typing

# PIP3 modules
import PIL.Image
import PIL.ImageDraw
import PIL.ImageFont
import reportlab.lib.pagesizes
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import git_barcode_sheet as gbs
import git_barcode_sheet.commands
import git_barcode_sheet.config
import git_barcode_sheet.fonts
import git_barcode_sheet.layout
import git_barcode_sheet.symbols


GitCommand = gbs.commands.GitCommand
SheetConfig = gbs.config.SheetConfig
PageGeometry = gbs.config.PageGeometry
CellResult = gbs.config.CellResult
SheetResult = gbs.config.SheetResult
FontCache = gbs.fonts.FontCache
SymbolError = gbs.symbols.SymbolError

SymbolEncoder = typing.Callable[[str, str, int, int], PIL.Image.Image]

MODE_LINEAR = gbs.config.MODE_LINEAR
MODE_MATRIX = gbs.config.MODE_MATRIX
TITLE_FONT_SIZE = gbs.config.TITLE_FONT_SIZE
LABEL_FONT_SIZE = gbs.config.LABEL_FONT_SIZE
DESCRIPTION_FONT_SIZE = gbs.config.DESCRIPTION_FONT_SIZE
FOOTER_FONT_SIZE = gbs.config.FOOTER_FONT_SIZE
LINE_SPACING = gbs.config.LINE_SPACING
LABEL_GAP = gbs.config.LABEL_GAP
DESCRIPTION_GAP = gbs.config.DESCRIPTION_GAP
DESCRIPTION_PADDING = gbs.config.DESCRIPTION_PADDING
FOOTER_TEXT_INSET = gbs.config.FOOTER_TEXT_INSET
CELL_BORDER_WIDTH = gbs.config.CELL_BORDER_WIDTH
CELL_BORDER_COLOR = gbs.config.CELL_BORDER_COLOR
TEXT_COLOR = gbs.config.TEXT_COLOR
BACKGROUND_COLOR = gbs.config.BACKGROUND_COLOR
PROGRESS_BAR_WIDTH = gbs.config.PROGRESS_BAR_WIDTH
PROGRESS_UPDATE_EVERY = gbs.config.PROGRESS_UPDATE_EVERY

SYMBOLOGY_NAMES = {
	MODE_LINEAR: "Code128",
	MODE_MATRIX: "QR",
}


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def format_symbol_error(mode: str, error: SymbolError) -> str:
	"""
	Format a diagnostic line for a failed symbol.

	Args:
		mode: MODE_LINEAR or MODE_MATRIX.
		error: SymbolError raised while encoding or scaling.

	Returns:
		Message such as "Code128 encode error for 'git x': ...".
	"""
	name = SYMBOLOGY_NAMES.get(mode, mode)
	return f"{name} {error.stage} error for {error.code!r}: {error.reason}"


#============================================
def draw_wrapped_text(
	draw: PIL.ImageDraw.ImageDraw,
	text: str,
	font: PIL.ImageFont.FreeTypeFont,
	x: float,
	y: float,
	width: float,
	line_spacing: float,
) -> int:
	"""
	Draw word-wrapped text, each line centered in [x, x + width].

	Args:
		draw: Pillow draw context.
		text: Text to wrap.
		font: Font for drawing and measuring.
		x: Left edge of the wrap box.
		y: Top of the first line.
		width: Wrap width.
		line_spacing: Line height multiplier.

	Returns:
		Number of lines drawn.
	"""
	lines = gbs.fonts.wrap_text(text, font, width)
	step = gbs.fonts.line_height(font) * line_spacing
	center_x = x + width / 2.0
	for index, line in enumerate(lines):
		draw.text(
			(center_x, y + index * step),
			line,
			fill=TEXT_COLOR,
			font=font,
			anchor="ma",
		)
	return len(lines)


#============================================
def draw_cell(
	image: PIL.Image.Image,
	draw: PIL.ImageDraw.ImageDraw,
	geometry: PageGeometry,
	index: int,
	command: GitCommand,
	config: SheetConfig,
	fonts: FontCache,
	encoder: SymbolEncoder,
) -> CellResult:
	"""
	Draw one command cell: border, symbol, label and description.

	Args:
		image: Sheet canvas.
		draw: Draw context for the canvas.
		geometry: Page geometry.
		index: Flat command index.
		command: Command to draw.
		config: Sheet configuration.
		fonts: Font cache.
		encoder: Callable (code, mode, width, height) -> image.

	Returns:
		CellResult describing what was drawn.
	"""
	col, row = gbs.layout.cell_position(index, geometry.columns)
	x0, y0, x1, y1 = gbs.layout.compute_cell_box(geometry, index)
	mode = gbs.layout.select_mode(command.code, config.short_code_max_length)
	result = CellResult(
		index=index,
		code=command.code,
		label=command.display_label,
		mode=mode,
		column=col,
		row=row,
		cell_box=(x0, y0, x1, y1),
	)

	draw.rectangle(
		[int(x0), int(y0), int(x1), int(y1)],
		outline=CELL_BORDER_COLOR,
		width=CELL_BORDER_WIDTH,
	)

	target_width, target_height = gbs.layout.compute_symbol_size(geometry, mode)
	try:
		symbol = encoder(command.code, mode, target_width, target_height)
	except SymbolError as error:
		result.stage = error.stage
		result.reason = format_symbol_error(mode, error)
		return result

	center_x = x0 + geometry.cell_width / 2.0
	symbol_x = int(center_x - symbol.width / 2.0)
	symbol_y = int(y0 + gbs.layout.symbol_top_offset(mode))
	image.paste(symbol, (symbol_x, symbol_y))
	result.symbol_box = (symbol_x, symbol_y, symbol_x + symbol.width, symbol_y + symbol.height)

	label_y = symbol_y + target_height + LABEL_GAP
	draw.text(
		(center_x, label_y),
		command.display_label,
		fill=TEXT_COLOR,
		font=fonts.get(LABEL_FONT_SIZE, bold=True),
		anchor="ms",
	)

	description_y = label_y + DESCRIPTION_GAP
	draw_wrapped_text(
		draw,
		command.description,
		fonts.get(DESCRIPTION_FONT_SIZE),
		x0 + DESCRIPTION_PADDING,
		description_y,
		geometry.cell_width - 2 * DESCRIPTION_PADDING,
		LINE_SPACING,
	)
	return result


#============================================
def draw_footer(
	image: PIL.Image.Image,
	draw: PIL.ImageDraw.ImageDraw,
	geometry: PageGeometry,
	config: SheetConfig,
	fonts: FontCache,
	encoder: SymbolEncoder,
) -> str | None:
	"""
	Draw the repository QR code and its URL at the bottom of the page.

	Args:
		image: Sheet canvas.
		draw: Draw context for the canvas.
		geometry: Page geometry.
		config: Sheet configuration.
		fonts: Font cache.
		encoder: Callable (code, mode, width, height) -> image.

	Returns:
		None when drawn, otherwise the failure message.
	"""
	size = gbs.layout.compute_footer_size(geometry)
	try:
		symbol = encoder(config.footer_url, MODE_MATRIX, size, size)
	except SymbolError as error:
		return f"QR {error.stage} error for footer: {error.reason}"

	origin = gbs.layout.compute_footer_origin(geometry, symbol.width, size)
	image.paste(symbol, origin)

	draw.text(
		(geometry.width / 2.0, geometry.height - FOOTER_TEXT_INSET),
		config.footer_url,
		fill=TEXT_COLOR,
		font=fonts.get(FOOTER_FONT_SIZE),
		anchor="ms",
	)
	return None


#============================================
def render_sheet(
	commands: typing.Sequence[GitCommand],
	config: SheetConfig,
	fonts: FontCache | None = None,
	encoder: SymbolEncoder = gbs.symbols.encode_symbol,
	verbose: bool = True,
) -> SheetResult:
	"""
	Render the full sheet in memory.

	Encoding failures are isolated per cell; the footer is attempted no
	matter how the grid went.

	Args:
		commands: Ordered commands, one per cell.
		config: Sheet configuration.
		fonts: Font cache, created when omitted.
		encoder: Callable (code, mode, width, height) -> image.
		verbose: Print progress and diagnostics.

	Returns:
		SheetResult with the canvas and per-cell results.
	"""
	if fonts is None:
		fonts = FontCache()
	geometry = gbs.layout.compute_page_geometry(config, len(commands))

	image = PIL.Image.new("RGB", (geometry.width, geometry.height), BACKGROUND_COLOR)
	draw = PIL.ImageDraw.Draw(image)

	draw.text(
		(geometry.width / 2.0, geometry.margin / 2.0),
		config.title,
		fill=TEXT_COLOR,
		font=fonts.get(TITLE_FONT_SIZE),
		anchor="mm",
	)

	cells: list[CellResult] = []
	messages: list[str] = []
	total = len(commands)
	if verbose and total > 0:
		print_progress("Cells", 0, total)
	for index, command in enumerate(commands):
		cell = draw_cell(image, draw, geometry, index, command, config, fonts, encoder)
		cells.append(cell)
		if cell.reason is not None:
			messages.append(cell.reason)
		done = index + 1
		if verbose and (done % PROGRESS_UPDATE_EVERY == 0 or done == total):
			print_progress("Cells", done, total)
	if verbose and total > 0:
		print()

	footer_reason = draw_footer(image, draw, geometry, config, fonts, encoder)
	if footer_reason is not None:
		messages.append(footer_reason)

	if verbose:
		for message in messages:
			print(message)

	return SheetResult(
		image=image,
		geometry=geometry,
		cells=cells,
		footer_rendered=footer_reason is None,
		footer_reason=footer_reason,
	)


#============================================
def save_png(image: PIL.Image.Image, output_path: pathlib.Path, dpi: int) -> None:
	"""
	Write the canvas as a PNG tagged with its resolution.

	Args:
		image: Sheet canvas.
		output_path: Output PNG path.
		dpi: Dots per inch stored in the file.
	"""
	image.save(output_path, format="PNG", dpi=(dpi, dpi))


#============================================
def save_pdf(image: PIL.Image.Image, output_path: pathlib.Path, title: str) -> None:
	"""
	Write the canvas as a one-page A4 PDF.

	Args:
		image: Sheet canvas.
		output_path: Output PDF path.
		title: Document title metadata.
	"""
	page_width, page_height = reportlab.lib.pagesizes.A4
	pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=(page_width, page_height))
	pdf.setTitle(title)
	pdf.drawImage(
		reportlab.lib.utils.ImageReader(image),
		0,
		0,
		width=page_width,
		height=page_height,
		mask=None,
		preserveAspectRatio=False,
		anchor="sw",
	)
	pdf.save()


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	outputs: dict[str, str],
	result: SheetResult,
	config: SheetConfig,
	fonts: FontCache,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		outputs: Written files keyed by kind ("png", "pdf").
		result: Sheet render result.
		config: Sheet configuration.
		fonts: Font cache used for rendering.
	"""
	geometry = result.geometry
	data = {
		"outputs": outputs,
		"total_cells": len(result.cells),
		"rendered_cells": result.rendered_cells,
		"failed_cells": result.failed_cells,
		"footer": {
			"url": config.footer_url,
			"rendered": result.footer_rendered,
			"error": result.footer_reason,
		},
		"cells": [
			{
				"index": cell.index,
				"code": cell.code,
				"label": cell.label,
				"mode": cell.mode,
				"column": cell.column,
				"row": cell.row,
				"rendered": cell.rendered,
				"stage": cell.stage,
				"error": cell.reason,
			}
			for cell in result.cells
		],
		"layout": {
			"dpi": config.dpi,
			"page_width": geometry.width,
			"page_height": geometry.height,
			"margin": geometry.margin,
			"columns": geometry.columns,
			"rows": geometry.rows,
			"cell_width": geometry.cell_width,
			"cell_height": geometry.cell_height,
			"short_code_max_length": config.short_code_max_length,
		},
		"fonts": {
			"regular": fonts.regular,
			"bold": fonts.bold,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
