"""
Command line tools: `python -m vsop87 <command>`.

- convert: official VSOP87 files -> json term tables (one file per version)
- truncate: json term table -> smaller json term table
- check: compare the series against the reference values in vsop87.chk
- solve: print the position of a body at a Julian Day
- compare-de: errors of VSOP87A against a JPL DE kernel (needs jplephem)
"""
import argparse
import dataclasses
import logging
import os

from . import __version__
from .elements import vsop87_to_keplerian
from .reader import read_check_file
from .solvers import solve
from .terms import TermTableStore, default_store, load_directory
from .truncate import TruncationConfig, truncate_store
from .validation import ErrorStats, compare_with_jpl_de, dms_string, generate_test_times, jplephem_pos_vel, run_check_records
from .variants import Variant

def _convert(args):
    store = TermTableStore.from_vsop87_files(args.input_dir, args.variants)
    os.makedirs(args.output_dir, exist_ok=True)
    for variant in store.variants():
        path = os.path.join(args.output_dir, f'{variant.file_prefix.lower()}.json')
        store.write_json(variant, path, comment=f'{variant.file_prefix} raw data with coefficients a, b, c', version=args.tag)
        print(f'Wrote {path} ({len(store.bodies(variant))} bodies).')
    print(f'total # of terms = {store.term_count()}')

def _truncate(args):
    store = TermTableStore.from_json(args.input)
    config = TruncationConfig(t_max=args.t_max, tolerance=args.tolerance, sig_figs=args.sig_figs)
    truncated = truncate_store(store, config)
    variant = store.variants()[0]
    truncated.write_json(variant, args.output, comment=f'{variant.file_prefix} truncated, {config}', version=args.tag)
    print(f'Wrote {args.output}: {store.term_count()} -> {truncated.term_count()} terms.')

def _check(args):
    store = load_directory(args.data_dir) if args.data_dir else default_store()
    records = [r for r in read_check_file(args.chk_file, args.variant) if (r.variant, r.body) in store]
    if not records:
        print('No check records with loaded tables.')
        return 1
    results = run_check_records(records, store)
    for variant in sorted({r.variant for r in records}, key=lambda v: v.value):
        subset = [r for r in results if r.record.variant is variant]
        print(f'{variant.file_prefix}: {len(subset)} records')
        print('    error in first triple: ', ErrorStats.of([r.error_pos for r in subset]))
        print('    error in second triple:', ErrorStats.of([r.error_vel for r in subset]))
    return 0

def _solve(args):
    elements = solve(args.body, args.variant, args.jd)
    print(f'{elements.variant.file_prefix} {elements.body} JD{args.jd}')
    for name, value in elements.as_dict().items():
        print(f'{name:>16} {value: .12f}')
    if args.keplerian:
        for name, value in dataclasses.asdict(vsop87_to_keplerian(elements)).items():
            print(f'{name:>20} {value: .12f}')
    return 0

def _compare_de(args):
    store = load_directory(args.data_dir) if args.data_dir else default_store()
    bodies = args.bodies or store.bodies(Variant.A)
    times = generate_test_times(args.num)
    print(f'{"BODY":>10}{"INTERVAL":>16}{"MEAN_POS_ERR":>15}{"MAX_POS_ERR":>15}{"MAX_VEL_ERR":>15}')
    with jplephem_pos_vel(args.kernel) as jpl_pos_vel:
        for interval, jds in times.items():
            for body, (err_p, err_v) in compare_with_jpl_de(jpl_pos_vel, bodies, jds, store).items():
                print(f'{body:>10}{interval:>16}{dms_string(err_p.mean, 2):>15}'
                      f'{dms_string(err_p.max, 2):>15}{err_v.max:>15.0e}')
    return 0

def build_parser():
    parser = argparse.ArgumentParser(prog='vsop87', description='VSOP87 planetary theory tools.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='log debug messages')
    commands = parser.add_subparsers(dest='command', required=True)

    p = commands.add_parser('convert', help='convert official VSOP87 files to json tables')
    p.add_argument('input_dir')
    p.add_argument('output_dir')
    p.add_argument('--variants', nargs='*', type=Variant.parse, default=None)
    p.add_argument('--tag', default='', help='version string stored in the json files')
    p.set_defaults(func=_convert)

    p = commands.add_parser('truncate', help='drop small terms from a json table')
    p.add_argument('input')
    p.add_argument('output')
    p.add_argument('--t-max', type=float, default=1.0, help='maximum |t| in Julian millennia')
    p.add_argument('--tolerance', type=float, default=1.0e-8)
    p.add_argument('--sig-figs', type=int, default=None)
    p.add_argument('--tag', default='')
    p.set_defaults(func=_truncate)

    p = commands.add_parser('check', help='compare against vsop87.chk')
    p.add_argument('chk_file')
    p.add_argument('--data-dir', default=None)
    p.add_argument('--variant', type=Variant.parse, default=None)
    p.set_defaults(func=_check)

    p = commands.add_parser('solve', help='evaluate one body')
    p.add_argument('body')
    p.add_argument('jd', type=float)
    p.add_argument('--variant', type=Variant.parse, default=Variant.D)
    p.add_argument('--keplerian', action='store_true', help='also print osculating elements')
    p.set_defaults(func=_solve)

    p = commands.add_parser('compare-de', help='errors against a JPL DE kernel')
    p.add_argument('kernel')
    p.add_argument('--data-dir', default=None)
    p.add_argument('--bodies', nargs='*', default=None)
    p.add_argument('--num', type=int, default=100)
    p.set_defaults(func=_compare_de)
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    return args.func(args) or 0
