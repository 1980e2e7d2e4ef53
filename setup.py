"""Installs pycmapproc using setuptools

Run:
	pip install .

to install this package.
"""

from setuptools import setup
import sys

###############################################################################
# arguments for the setup command
###############################################################################
name = "pycmapproc"
version = "1.0.0"
desc = "CMap processor"
long_desc = "Interprets Adobe CMap resources into lookups of character codes to CIDs and unicode text"
classifiers = [
	"Intended Audience :: Developers",
	"Programming Language :: Python :: 3",
	"Topic :: Text Processing :: Fonts",
]
author = "Colin M Burnett"
author_email = "cmlburnett@gmail.com"
url = "http://www.candysporks.org"
cp_license = "BSD"
packages = [
	"pycmapproc",
	"pycmapproc.cli",
	"pycmapproc.parser",
]
install_requires = [
	"ply>=3.11",
]
extras_require = {
	"test": ["pytest"],
}
entry_points = {
	"console_scripts": [
		"pycmapproc = pycmapproc.cli:Run",
	],
}

required_python_version = (3, 7)

###############################################################################
# end arguments for setup
###############################################################################

setup_params = dict(
	name=name,
	version=version,
	description=desc,
	long_description=long_desc,
	classifiers=classifiers,
	author=author,
	author_email=author_email,
	url=url,
	license=cp_license,
	packages=packages,
	install_requires=install_requires,
	extras_require=extras_require,
	entry_points=entry_points,
	python_requires=">=3.7",
)

def main():
	if sys.version_info < required_python_version:
		s = "I'm sorry, but %s %s requires Python %s or later."
		print(s % (name, version, ".".join(str(_) for _ in required_python_version)))
		sys.exit(1)

	setup(**setup_params)


if __name__ == "__main__":
    main()
