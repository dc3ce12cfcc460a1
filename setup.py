import pathlib

import setuptools

readme = pathlib.Path(__file__).parent.resolve() / "README.md"

setuptools.setup(
    long_description=readme.read_text(encoding="utf-8"),
    long_description_content_type="text/markdown",
)
