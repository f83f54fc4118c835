import PIL.Image
import pytest

import git_barcode_sheet.commands
import git_barcode_sheet.config
import git_barcode_sheet.fonts
import git_barcode_sheet.render
import git_barcode_sheet.symbols


COMMANDS = git_barcode_sheet.commands.COMMANDS
GitCommand = git_barcode_sheet.commands.GitCommand
SymbolError = git_barcode_sheet.symbols.SymbolError
INK_THRESHOLD = 128


#============================================
def _has_ink(image: PIL.Image.Image, box: tuple[int, int, int, int]) -> bool:
	"""
	Check a region for dark pixels.

	Args:
		image: Rendered sheet.
		box: Region (x0, y0, x1, y1).

	Returns:
		True if any pixel is darker than INK_THRESHOLD.
	"""
	gray = image.crop(box).convert("L")
	low, _high = gray.getextrema()
	return low < INK_THRESHOLD


#============================================
def _render(commands, encoder=git_barcode_sheet.symbols.encode_symbol) -> git_barcode_sheet.config.SheetResult:
	"""
	Render a sheet quietly with the default config.
	"""
	config = git_barcode_sheet.config.build_default_config()
	fonts = git_barcode_sheet.fonts.FontCache()
	return git_barcode_sheet.render.render_sheet(commands, config, fonts, encoder=encoder, verbose=False)


@pytest.fixture(scope="module")
def full_sheet() -> git_barcode_sheet.config.SheetResult:
	return _render(COMMANDS)


#============================================
def test_full_sheet_renders_every_cell(full_sheet) -> None:
	"""
	All 40 fixed commands and the footer render.
	"""
	assert full_sheet.image.size == (2481, 3507)
	assert full_sheet.image.mode == "RGB"
	assert len(full_sheet.cells) == 40
	assert full_sheet.rendered_cells == 40
	assert full_sheet.failed_cells == 0
	assert full_sheet.footer_rendered
	assert full_sheet.footer_reason is None


#============================================
def test_symbols_are_drawn_inside_cells(full_sheet) -> None:
	"""
	Each symbol has ink and sits horizontally centered inside its cell.
	"""
	for cell in full_sheet.cells:
		x0, y0, x1, y1 = cell.cell_box
		sx0, sy0, sx1, sy1 = cell.symbol_box
		assert x0 <= sx0 < sx1 <= x1
		assert y0 <= sy0 < sy1 <= y1
		assert abs((sx0 + sx1) / 2.0 - (x0 + x1) / 2.0) <= 1.0
		assert _has_ink(full_sheet.image, cell.symbol_box)


#============================================
def test_cells_follow_row_major_order(full_sheet) -> None:
	"""
	Cell results keep the command order and grid slots.
	"""
	for index, (cell, command) in enumerate(zip(full_sheet.cells, COMMANDS)):
		assert cell.index == index
		assert cell.code == command.code
		assert (cell.column, cell.row) == (index % 4, index // 4)


#============================================
def test_scenario_modes(full_sheet) -> None:
	"""
	Short and long commands get the expected symbologies.
	"""
	by_code = {cell.code: cell for cell in full_sheet.cells}
	status = by_code["git status"]
	assert status.mode == "linear"
	assert status.label == "git status"
	submodule = by_code["git submodule update --init --recursive"]
	assert submodule.mode == "matrix"
	assert submodule.label == "submodules"
	sx0, sy0, sx1, sy1 = submodule.symbol_box
	assert sx1 - sx0 == sy1 - sy0


#============================================
def test_title_and_footer_have_ink(full_sheet) -> None:
	"""
	The title band and the footer band are not blank.
	"""
	geometry = full_sheet.geometry
	title_band = (0, 0, geometry.width, int(geometry.margin))
	footer_band = (0, int(geometry.bottom) + 1, geometry.width, geometry.height)
	assert _has_ink(full_sheet.image, title_band)
	assert _has_ink(full_sheet.image, footer_band)


#============================================
def test_encode_failure_is_isolated() -> None:
	"""
	A failing cell is skipped, later cells still render.
	"""
	def flaky_encoder(code: str, mode: str, width: int, height: int) -> PIL.Image.Image:
		if code == "git diff":
			raise SymbolError("encode", code, "injected failure")
		return git_barcode_sheet.symbols.encode_symbol(code, mode, width, height)

	commands = COMMANDS[:8]
	result = _render(commands, flaky_encoder)
	assert result.rendered_cells == 7
	assert result.failed_cells == 1
	failed = result.cells[2]
	assert failed.code == "git diff"
	assert failed.symbol_box is None
	assert failed.stage == "encode"
	assert "git diff" in failed.reason
	assert "Code128 encode error" in failed.reason
	for cell in result.cells[3:]:
		assert cell.rendered
	assert result.footer_rendered


#============================================
def test_failed_cell_keeps_border_only() -> None:
	"""
	A skipped cell shows its border but nothing inside.
	"""
	def failing_encoder(code: str, mode: str, width: int, height: int) -> PIL.Image.Image:
		raise SymbolError("scale", code, "injected failure")

	result = _render(COMMANDS[:1], failing_encoder)
	cell = result.cells[0]
	assert cell.stage == "scale"
	x0, y0, x1, y1 = (int(value) for value in cell.cell_box)
	inner = (x0 + 3, y0 + 3, x1 - 3, y1 - 3)
	assert not _has_ink(result.image, inner)
	border = result.image.getpixel((x0, (y0 + y1) // 2))
	assert border == git_barcode_sheet.config.CELL_BORDER_COLOR


#============================================
def test_footer_attempted_when_grid_fails() -> None:
	"""
	The footer QR is still tried and drawn when every cell fails.
	"""
	attempts: list[str] = []
	footer_url = git_barcode_sheet.config.FOOTER_URL

	def grid_failing_encoder(code: str, mode: str, width: int, height: int) -> PIL.Image.Image:
		attempts.append(code)
		if code != footer_url:
			raise SymbolError("encode", code, "injected failure")
		return git_barcode_sheet.symbols.encode_symbol(code, mode, width, height)

	result = _render(COMMANDS, grid_failing_encoder)
	assert result.rendered_cells == 0
	assert result.failed_cells == len(COMMANDS)
	assert attempts[-1] == footer_url
	assert result.footer_rendered


#============================================
def test_footer_failure_is_not_fatal() -> None:
	"""
	A failing footer is reported and omitted.
	"""
	footer_url = git_barcode_sheet.config.FOOTER_URL

	def footer_failing_encoder(code: str, mode: str, width: int, height: int) -> PIL.Image.Image:
		if code == footer_url:
			raise SymbolError("scale", code, "injected failure")
		return git_barcode_sheet.symbols.encode_symbol(code, mode, width, height)

	result = _render(COMMANDS[:4], footer_failing_encoder)
	assert result.rendered_cells == 4
	assert not result.footer_rendered
	assert result.footer_reason.startswith("QR scale error for footer")


#============================================
def test_empty_label_renders_code() -> None:
	"""
	Cells report the code as label when the label is empty.
	"""
	commands = (GitCommand("git status", "", "Show working tree status."),)
	result = _render(commands)
	assert result.cells[0].label == "git status"
	assert result.cells[0].rendered


#============================================
def test_empty_code_cell_is_skipped() -> None:
	"""
	An empty code fails its own cell and the next cell still renders.
	"""
	commands = (
		GitCommand("", "", "empty"),
		GitCommand("git status", "", "ok"),
	)
	result = _render(commands)
	assert not result.cells[0].rendered
	assert result.cells[0].stage == "encode"
	assert "empty code" in result.cells[0].reason
	assert result.cells[1].rendered
	assert result.footer_rendered


#============================================
def test_failures_are_printed(capsys) -> None:
	"""
	Cell and footer failures are printed with the code and the stage.
	"""
	footer_url = git_barcode_sheet.config.FOOTER_URL

	def failing_encoder(code: str, mode: str, width: int, height: int) -> PIL.Image.Image:
		if code == "git diff":
			raise SymbolError("encode", code, "injected failure")
		if code == footer_url:
			raise SymbolError("scale", code, "injected failure")
		return git_barcode_sheet.symbols.encode_symbol(code, mode, width, height)

	config = git_barcode_sheet.config.build_default_config()
	fonts = git_barcode_sheet.fonts.FontCache()
	git_barcode_sheet.render.render_sheet(
		COMMANDS[:4], config, fonts, encoder=failing_encoder, verbose=True,
	)
	captured = capsys.readouterr()
	assert "Code128 encode error for 'git diff': injected failure" in captured.out
	assert "QR scale error for footer: injected failure" in captured.out
