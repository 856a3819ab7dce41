[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "squaresnap"
version = "1.0.0"
description = "Square screen capture tool: select a square region of the screen, preview it and save it as a numbered PNG."
requires-python = ">=3.10"
keywords = ["screenshot", "screen capture", "square", "png", "tkinter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Capture :: Screen Capture",
]
dependencies = [
    "pillow",
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[project.gui-scripts]
squaresnap = "squaresnap.app:main"

[tool.hatch.build.targets.wheel]
packages = ["squaresnap"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
