"""
Barcode and QR symbol encoding.

Both symbologies are reduced to a grid of modules (bars or squares) and then
scaled by a whole-number factor, so every module maps to the same number of
device pixels and scanners see crisp edges.
"""

# PIP3 modules
import barcode
import barcode.errors
import PIL.Image
import qrcode
import qrcode.constants
import qrcode.exceptions

# local repo modules
import git_barcode_sheet as gbs
import git_barcode_sheet.config


MODE_LINEAR = gbs.config.MODE_LINEAR
MODE_MATRIX = gbs.config.MODE_MATRIX

INK = 0
PAPER = 255

STAGE_ENCODE = "encode"
STAGE_SCALE = "scale"


class SymbolError(Exception):
	"""
	Raised when a symbol cannot be encoded or scaled.
	"""

	def __init__(self, stage: str, code: str, reason: str):
		self.stage = stage
		self.code = code
		self.reason = reason
		super().__init__(f"{stage} failed for {code!r}: {reason}")


#============================================
def modules_to_image(rows: list[list[bool]]) -> PIL.Image.Image:
	"""
	Convert a module grid into a one-pixel-per-module grayscale image.

	Args:
		rows: Module rows, True for dark modules.

	Returns:
		Grayscale PIL image.
	"""
	height = len(rows)
	width = len(rows[0]) if height else 0
	image = PIL.Image.new("L", (width, height), PAPER)
	pixels = [INK if dark else PAPER for row in rows for dark in row]
	image.putdata(pixels)
	return image


#============================================
def encode_linear(code: str) -> PIL.Image.Image:
	"""
	Encode text as a Code128 barcode, one pixel per bar module.

	Args:
		code: Text to encode.

	Returns:
		Grayscale image, 1 pixel tall.
	"""
	if not code:
		raise SymbolError(STAGE_ENCODE, code, "empty code")
	try:
		code128_class = barcode.get_barcode_class("code128")
		symbol = code128_class(code)
		patterns = symbol.build()
	except (barcode.errors.BarcodeError, KeyError) as error:
		raise SymbolError(STAGE_ENCODE, code, str(error)) from error
	pattern = "".join(patterns)
	if not pattern:
		raise SymbolError(STAGE_ENCODE, code, "empty bar pattern")
	return modules_to_image([[bit == "1" for bit in pattern]])


#============================================
def encode_matrix(code: str, error_correction: int = qrcode.constants.ERROR_CORRECT_M) -> PIL.Image.Image:
	"""
	Encode text as a QR code, one pixel per module, without a quiet zone.

	Args:
		code: Text to encode.
		error_correction: qrcode error correction constant.

	Returns:
		Grayscale square image.
	"""
	qr = qrcode.QRCode(version=None, error_correction=error_correction, box_size=1, border=0)
	try:
		qr.add_data(code)
		qr.make(fit=True)
	except (qrcode.exceptions.DataOverflowError, ValueError) as error:
		raise SymbolError(STAGE_ENCODE, code, str(error) or "data overflow") from error
	return modules_to_image(qr.get_matrix())


#============================================
def scale_symbol(symbol: PIL.Image.Image, width: int, height: int, code: str = "") -> PIL.Image.Image:
	"""
	Scale a module image by a whole-number factor into a width x height box.

	Linear symbols (1 pixel tall) stretch to the full height; matrix symbols
	keep square modules. The result is always exactly width x height with the
	modules centered.

	Args:
		symbol: Module image from encode_linear or encode_matrix.
		width: Target width in pixels.
		height: Target height in pixels.
		code: Encoded text, for error messages.

	Returns:
		Grayscale PIL image.
	"""
	module_width, module_height = symbol.size
	if module_width <= 0 or module_height <= 0:
		raise SymbolError(STAGE_SCALE, code, "symbol has no modules")
	is_linear = module_height == 1
	factor = width // module_width
	if not is_linear:
		factor = min(factor, height // module_height)
	if factor <= 0 or height <= 0:
		raise SymbolError(
			STAGE_SCALE,
			code,
			f"can not scale {module_width}x{module_height} symbol to {width}x{height}",
		)

	scaled_width = module_width * factor
	scaled_height = height if is_linear else module_height * factor
	scaled = symbol.resize((scaled_width, scaled_height), PIL.Image.Resampling.NEAREST)

	result = PIL.Image.new("L", (width, height), PAPER)
	offset_x = (width - scaled_width) // 2
	offset_y = (height - scaled_height) // 2
	result.paste(scaled, (offset_x, offset_y))
	return result


#============================================
def encode_symbol(code: str, mode: str, width: int, height: int) -> PIL.Image.Image:
	"""
	Encode and scale a code in the given mode.

	Args:
		code: Text to encode.
		mode: MODE_LINEAR or MODE_MATRIX.
		width: Target width in pixels.
		height: Target height in pixels.

	Returns:
		Scaled grayscale PIL image.
	"""
	if mode == MODE_LINEAR:
		raw = encode_linear(code)
	elif mode == MODE_MATRIX:
		raw = encode_matrix(code)
	else:
		raise ValueError(f"unknown mode: {mode}")
	return scale_symbol(raw, width, height, code)
