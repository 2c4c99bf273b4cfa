from setuptools import setup, find_packages

setup(
    name="traversalviz",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src", exclude=["tests", "tests.*"]),
    install_requires=[
        "pydantic>=2",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "traversalviz=traversalviz.__main__:main",
        ],
    },
    python_requires=">=3.8",
    description="animated breadth-first and depth-first traversal visualizer for small graphs",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
)
