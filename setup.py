from setuptools import find_packages, setup


setup(
    name="cxe",
    version="1.0.0",
    description="C/C++ meta compiler/executor driven by directives embedded in the source file",
    author="GAHEOS",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["cxe=cxe.cli:main"]},
)
