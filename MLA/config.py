import yaml
import numpy as np
from pathlib import Path

from MLA.Utilities.logger import resetLevels

# Logging levels

levels = {}
levels['arrays'] = 'debug'
levels['products'] = 'info'
levels['invariants'] = 'info'

# Run parameters
runParams = {}

# Relative tolerance of approximate equality. Defaults to the square root of
# the float64 machine epsilon.

runParams['rtol'] = float(np.sqrt(np.finfo(np.float64).eps))

# Absolute tolerance of approximate equality.

runParams['atol'] = 0.


def loadConfig(path):
	'''
	Merges the levels and runParams mappings of a YAML file into the module
	defaults, refreshes the derived parameters and applies the levels to
	loggers which already exist.
	:param path: Path of the YAML file. Missing files are ignored.
	:return: True if a file was read, False otherwise.
	'''
	global rtol, atol

	config_file = Path(path)
	if config_file.is_file():
		with open(config_file, 'r') as f:
			data = yaml.safe_load(f) or {}
		if 'levels' in data.keys():
			for key in data['levels'].keys():
				levels[key] = data['levels'][key]
		if 'runParams' in data.keys():
			for key in data['runParams'].keys():
				runParams[key] = data['runParams'][key]
		read = True
	else:
		read = False

	rtol = float(runParams['rtol'])
	atol = float(runParams['atol'])
	resetLevels(levels)
	return read

# Read config file if possible

home = str(Path.home())
config_path = home + '/.mla_config'
loadConfig(config_path)
