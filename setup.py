#!/usr/bin/env python

from setuptools import setup


setup(
	name = 'MLA',
	version = '1.0',
	description = 'Multilinear algebra on numpy arrays',
	classifiers = [
	'Programming Language :: Python :: 3',
	'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
	'Operating System :: Microsoft :: Windows',
	'Operating System :: POSIX',
	'Operating System :: Unix',
	'Operating System :: MacOS'
	],
	packages = [
	'MLA',
	'MLA.Algebra',
	'MLA.Tensor',
	'MLA.Test',
	'MLA.Utilities'
	],
	install_requires=['numpy', 'pyyaml'],
	extras_require={'test': ['pytest']}
)
