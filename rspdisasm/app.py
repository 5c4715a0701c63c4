# rspdisasm/app.py
from flask import Flask, request, jsonify
from flask_cors import CORS
import logging

from rspdisasm.rsp_consts import CORS_ORIGIN, DEFAULT_PORT, DEFAULT_VRAM
from rspdisasm.rsp_disassembler import RspDisassembler
from rspdisasm.rsp_errors import RspDisasmError
from rspdisasm.rsp_printer import PrintOptions

#logging.basicConfig(level=logging.DEBUG) # Use DEBUG for development
logger = logging.getLogger(__name__)

app = Flask(__name__)
# Adjust CORS for your frontend origin if different
CORS(app, resources={r"/api/*": {"origins": CORS_ORIGIN}})


def _parse_int(value, default):
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError("expected an integer or a hex string")
    if isinstance(value, int):
        return value
    return int(str(value), 0)


def _request_options(data):
    return PrintOptions(
        reg_names=bool(data.get("reg_names", True)),
        armips_cop0_names=bool(data.get("armips_cop0_names", True)),
    )


@app.route('/')
def index():
    return "RSP Disassembler Backend is running!"


@app.route('/api/ping', methods=['GET'])
def ping():
    logger.debug("Ping endpoint called")
    return jsonify({"message": "pong"})


@app.route('/api/disassemble', methods=['POST'])
def handle_disassemble():
    """
    Disassembles either a hex byte string ('data') or a list of hex words
    ('machine_code'), starting at 'vaddr'.
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or ('data' not in data and 'machine_code' not in data):
            return jsonify({"errors": [{"message": "Missing 'data' (hex string) or 'machine_code' (list of hex strings) key in request."}]}), 400

        try:
            vaddr = _parse_int(data.get('vaddr'), DEFAULT_VRAM) & 0xFFFFFFFF
        except ValueError as e:
            return jsonify({"errors": [{"message": f"Invalid 'vaddr': {e}"}]}), 400

        disassembler = RspDisassembler(_request_options(data))

        if 'machine_code' in data:
            machine_code_lines = data['machine_code']
            if not isinstance(machine_code_lines, list) or not all(isinstance(l, str) for l in machine_code_lines):
                return jsonify({"errors": [{"message": "Invalid 'machine_code' key (must be list of hex strings)."}]}), 400
            logger.debug(f"Received machine code for disassembly: {machine_code_lines[:5]}") # Log first few lines
            result = disassembler.disassemble_hex_words(machine_code_lines, vaddr)
            if result['errors']:
                return jsonify(result), 400
            return jsonify(result)

        try:
            raw = bytes.fromhex(str(data['data']))
        except ValueError as e:
            return jsonify({"errors": [{"message": f"Invalid hex data: {e}"}]}), 400
        logger.debug(f"Received {len(raw)} bytes for disassembly at 0x{vaddr:08X}")
        try:
            text = disassembler.disassemble_bytes(raw, vaddr)
        except RspDisasmError as e:
            logger.warning(f"Disassembly rejected: {e}")
            return jsonify({"assembly_code": "", "errors": [{"message": str(e)}]}), 400
        logger.debug(f"Disassembly result: {text[:100]}...") # Log start of output
        return jsonify({"assembly_code": text, "errors": []})
    except Exception as e:
        logger.error(f"Error during disassembly: {e}", exc_info=True)
        return jsonify({"errors": [{"message": f"Internal server error during disassembly: {e}"}]}), 500


if __name__ == '__main__':
    # Or run with `python -m flask --app rspdisasm.app run --port 5001` from the root directory
    app.run(debug=False, port=DEFAULT_PORT)
