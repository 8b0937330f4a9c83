# msws/client.py
# Client that queries the oracle /get_output several times, replays the same
# stream from a locally seeded generator, then predicts the next output and
# checks the prediction against /validate.

import argparse
import sys
import time

import requests

from .rng import Generator

ORACLE = 'http://127.0.0.1:5000'
HEX_DIGITS = {'uint32': 8, 'uint64': 16}


def local_stream(seed, output_mode='uint32'):
    rng = Generator(seed)
    draw = rng.draw_u64 if output_mode == 'uint64' else rng.draw_u32
    while True:
        yield draw()


def query_oracle(n, base=ORACLE, session=None):
    session = session or requests
    outs = []
    for _ in range(n):
        r = session.get(base + '/get_output', timeout=5)
        r.raise_for_status()
        outs.append(int(r.json()['output'], 16))
    return outs


def first_mismatch(observed, seed, output_mode='uint32'):
    """Index of the first observed output the local stream disagrees with, else None."""
    for i, (got, want) in enumerate(zip(observed, local_stream(seed, output_mode))):
        if got != want:
            return i
    return None


def predict_next(seed, steps, output_mode='uint32'):
    # output number `steps` (0-based) of the stream seeded with `seed`
    stream = local_stream(seed, output_mode)
    for _ in range(steps):
        next(stream)
    return next(stream)


def validate(candidate, output_mode='uint32', base=ORACLE, session=None):
    session = session or requests
    cand_hex = format(candidate, '0{}x'.format(HEX_DIGITS[output_mode]))
    r = session.post(base + '/validate', json={'candidate': cand_hex}, timeout=5)
    r.raise_for_status()
    return r.json()


def main(argv=None, session=None):
    parser = argparse.ArgumentParser(description='Check a running oracle against a local generator')
    parser.add_argument('--oracle', default=ORACLE, help='oracle base URL')
    parser.add_argument('--samples', type=int, default=4, help='number of outputs to collect')
    parser.add_argument('--seed', type=lambda value: int(value, 0), required=True,
                        help='seed the oracle was started with (decimal or 0x hex)')
    parser.add_argument('--output_mode', choices=sorted(HEX_DIGITS), default='uint32',
                        help='output mode the oracle serves')
    args = parser.parse_args(argv)
    width = HEX_DIGITS[args.output_mode]

    t0 = time.time()
    print(f"[client] Querying oracle for {args.samples} outputs (mode={args.output_mode})...")
    obs = query_oracle(args.samples, args.oracle, session)
    for i, o in enumerate(obs):
        print(f" obs[{i}]: {format(o, '0{}x'.format(width))}")

    bad = first_mismatch(obs, args.seed, args.output_mode)
    if bad is not None:
        print(f"[client] Stream diverges from seed {args.seed:08x} at obs[{bad}].")
        return 1

    predicted = predict_next(args.seed, len(obs), args.output_mode)
    print("[client] Stream matches. Predicted next output:")
    print(format(predicted, '0{}x'.format(width)))
    resp = validate(predicted, args.output_mode, args.oracle, session)
    print("[client] Validate response:", resp)
    print(f"[client] Done in {time.time()-t0:.2f}s")
    return 0 if resp.get('ok') else 1


if __name__ == '__main__':
    sys.exit(main())
