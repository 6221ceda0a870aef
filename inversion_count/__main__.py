from .benchmark import cli

cli(prog_name='inversion_count')  # pylint: disable=no-value-for-parameter
