# msws/app.py
# Flask oracle exposing /get_output, /get_bytes, /validate and /info
# Seed comes from seeding.derive_seed (SEED_MODE = 'fixed' | 'system' | 'time')

import logging
import threading

from flask import Flask, jsonify, request

from . import config
from .rng import Generator
from .seeding import derive_seed

logger = logging.getLogger('oracle')

OUTPUT_MODES = {'uint32': 8, 'uint64': 16}  # mode -> hex digits


def bad_request(reason):
    return jsonify({'ok': False, 'reason': reason}), 400


def parse_int_arg(name):
    raw = request.args.get(name)
    if raw is None:
        return None
    return int(raw, 0)


def create_app(seed=None, output_mode=None):
    output_mode = (output_mode or config.OUTPUT_MODE).lower()
    if output_mode not in OUTPUT_MODES:
        raise ValueError(f"Unknown output mode '{output_mode}', expected one of {sorted(OUTPUT_MODES)}")
    hexdigits = OUTPUT_MODES[output_mode]

    seed_mode = 'fixed' if seed is not None else config.SEED_MODE
    seed_val = derive_seed(mode=seed_mode, seed=seed)
    rng = Generator(seed_val)
    # one generator shared by all request threads
    lock = threading.Lock()

    def next_output():
        with lock:
            if output_mode == 'uint64':
                return rng.draw_u64()
            return rng.draw_u32()

    app = Flask(__name__)
    app.config['OUTPUT_MODE'] = output_mode

    @app.route('/get_output', methods=['GET'])
    def get_output():
        try:
            max_value = parse_int_arg('max')
        except ValueError:
            return bad_request('max must be an integer')
        if max_value is None:
            return jsonify({'output': format(next_output(), '0{}x'.format(hexdigits))})
        if output_mode != 'uint32':
            return bad_request('max is only supported in uint32 mode')
        try:
            with lock:
                out = rng.draw_u32_bounded(max_value)
        except ValueError as exc:
            return bad_request(str(exc))
        return jsonify({'output': format(out, '08x')})

    @app.route('/get_bytes', methods=['GET'])
    def get_bytes():
        try:
            n = parse_int_arg('n')
        except ValueError:
            return bad_request('n must be an integer')
        if n is None:
            return bad_request('need n')
        if n < 0 or n > config.MAX_BYTES:
            return bad_request(f'n must be in [0, {config.MAX_BYTES}]')
        with lock:
            data = rng.random_bytes(n)
        return jsonify({'output': data.hex()})

    @app.route('/validate', methods=['POST'])
    def validate():
        data = request.get_json(silent=True)
        if not data or 'candidate' not in data:
            return bad_request('need candidate')
        try:
            candidate = int(data['candidate'], 16)
        except (TypeError, ValueError):
            return bad_request('bad hex')
        expected = next_output()
        ok = candidate == expected
        if not ok:
            logger.info(f"validate mismatch: candidate={candidate:x} expected={expected:x}")
        return jsonify({'ok': ok, 'expected': format(expected, '0{}x'.format(hexdigits))})

    @app.route('/info', methods=['GET'])
    def info():
        return jsonify({
            'output_mode': output_mode,
            'seed_mode': seed_mode,
            'max_bytes': config.MAX_BYTES,
        })

    return app


def main():
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
    app = create_app()
    logger.info(f"Starting oracle at http://{config.HOST}:{config.PORT} with SEED_MODE={config.SEED_MODE}")
    app.run(host=config.HOST, port=config.PORT, debug=False)


if __name__ == '__main__':
    main()
