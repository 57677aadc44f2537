[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "byte6502"
version = "0.1.0"
description = "A 6502 fantasy console: CPU emulator, memory bus, assembly tokenizer, syntax highlighting and hex dumps"
requires-python = ">=3.10"
dependencies = []
keywords = ["6502", "emulator", "fantasy-console", "assembler", "cpu", "tokenizer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
byte6502-scan = "byte6502.scanner:main"

[tool.hatch.build.targets.wheel]
packages = ["byte6502"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
