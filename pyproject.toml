[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jbig2enc"
version = "0.1.1"
description = "JBIG2 encoding building blocks: QM arithmetic coder, generic and refinement region coding, symbol comparator and encoder option parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["jbig2", "compression", "image", "encoding", "pdf", "bi-level", "arithmetic-coding"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jbig2enc"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
