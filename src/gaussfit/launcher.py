import argparse
import logging
import os
import sys

import numpy as np


def getArgs(argv=None):
    parser = argparse.ArgumentParser(
        prog='gaussfit',
        description='Evaluate a model and its Jacobian on the grid of a fit.')
    parser.add_argument(
        '--model',
        help='The model to evaluate, by default GAUSS_2D_ROTATED.',
        default='GAUSS_2D_ROTATED',
        choices=[
            'GAUSS_1D', 'GAUSS_2D', 'GAUSS_2D_ELLIPTIC', 'GAUSS_2D_ROTATED']
    )
    parser.add_argument(
        '--parameters',
        help='The parameter vector of the fit, in model order.',
        type=float,
        nargs='+',
        required=True
    )
    parser.add_argument(
        '--n-points',
        help='Number of points of the fit, a perfect square for 2D models.',
        type=int,
        default=49
    )
    parser.add_argument(
        '--log-level',
        help='Logging level, '
        + 'if not specified, the environment variable GAUSSFIT_LOG_LEVEL '
        + 'is used (default WARNING).',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR']
    )

    return parser.parse_args(argv)


def getLogLevel(args):
    '''--log-level, else GAUSSFIT_LOG_LEVEL, else WARNING'''
    return args.log_level or os.environ.get('GAUSSFIT_LOG_LEVEL', 'WARNING')


def main(argv=None):
    args = getArgs(argv)

    logging.basicConfig(
        level=getLogLevel(args),
        format='%(asctime)s %(levelname)s %(message)s')

    from gaussfit.models import (
        CPU_calculate_models, GridShape, JacobianView, get_model)

    model = get_model(args.model)
    try:
        values, derivatives = CPU_calculate_models(
            model.model_id, np.array(args.parameters), args.n_points)
    except ValueError as e:
        logging.error(e)
        return 1

    if model.grid_2d:
        grid = GridShape.from_n_points(args.n_points)
        shape = (grid.n_points_y, grid.n_points_x)
    else:
        shape = (args.n_points,)

    jacobian = JacobianView(derivatives[0], model.n_parameters, args.n_points)

    with np.printoptions(precision=4, suppress=True, linewidth=120):
        print(f'{model.name} values:')
        print(values[0].reshape(shape))
        for k, name in enumerate(model.parameter_names):
            print(f'd/d{name}:')
            print(jacobian.column(k).reshape(shape))

    return 0


if __name__ == '__main__':
    sys.exit(main())
