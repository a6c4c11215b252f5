[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rusmorph"
version = "0.1.0"
description = "Building blocks for Russian morphological dictionaries: stem-interchange table compiler, interchange selection and dictionary comment helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["morphology", "russian", "lemmatization", "dictionary", "linguistics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Natural Language :: Russian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Linguistic",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rusmorph-makeich = "rusmorph.makeich:main"

[tool.hatch.build.targets.wheel]
packages = ["rusmorph"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
