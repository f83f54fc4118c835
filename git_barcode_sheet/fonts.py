"""
Font loading, caching and word wrapping.
"""

# Standard Library
import pathlib

# PIP3 modules
import PIL.ImageFont
import reportlab

# local repo modules
import git_barcode_sheet as gbs
import git_barcode_sheet.config


DEFAULT_FONT_REGULAR = gbs.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = gbs.config.DEFAULT_FONT_BOLD


class FontError(Exception):
	"""
	Raised when a font file can not be found or parsed.
	"""


#============================================
def get_font_dir() -> pathlib.Path:
	"""
	Directory holding the Bitstream Vera fonts shipped with reportlab.
	"""
	return pathlib.Path(reportlab.__file__).parent / "fonts"


#============================================
def resolve_font_path(font_file: str) -> pathlib.Path:
	"""
	Resolve a bundled font file name to a path.

	Args:
		font_file: File name such as "Vera.ttf".

	Returns:
		Absolute font path.
	"""
	path = get_font_dir() / font_file
	if not path.is_file():
		raise FontError(f"font file not found: {path}")
	return path


class FontCache:
	"""
	Lazily loaded fonts keyed by (file name, size).
	"""

	def __init__(self, regular: str = DEFAULT_FONT_REGULAR, bold: str = DEFAULT_FONT_BOLD):
		self.regular = regular
		self.bold = bold
		self._fonts: dict[tuple[str, float], PIL.ImageFont.FreeTypeFont] = {}

	def __len__(self) -> int:
		return len(self._fonts)

	#============================================
	def get(self, size: float, bold: bool = False) -> PIL.ImageFont.FreeTypeFont:
		"""
		Return a font at the given pixel size, loading it on first use.

		Args:
			size: Font size in pixels.
			bold: Use the bold face.

		Returns:
			Pillow FreeTypeFont.
		"""
		font_file = self.bold if bold else self.regular
		key = (font_file, float(size))
		font = self._fonts.get(key)
		if font is not None:
			return font
		path = resolve_font_path(font_file)
		try:
			font = PIL.ImageFont.truetype(str(path), float(size))
		except OSError as error:
			raise FontError(f"failed to load {font_file} (size={size:.1f}): {error}") from error
		self._fonts[key] = font
		return font


#============================================
def line_height(font: PIL.ImageFont.FreeTypeFont) -> float:
	"""
	Height of one line of text (ascent plus descent).
	"""
	ascent, descent = font.getmetrics()
	return float(ascent + descent)


#============================================
def wrap_text(text: str, font: PIL.ImageFont.FreeTypeFont, max_width: float) -> list[str]:
	"""
	Greedy word wrap so each line fits max_width.

	A single word wider than max_width gets a line of its own.

	Args:
		text: Text to wrap.
		font: Font used for measuring.
		max_width: Maximum line width in pixels.

	Returns:
		List of lines.
	"""
	lines: list[str] = []
	current = ""
	for word in text.split():
		candidate = current + (" " if current else "") + word
		if font.getlength(candidate) <= max_width:
			current = candidate
			continue
		if current:
			lines.append(current)
		current = word
	if current:
		lines.append(current)
	return lines
