from setuptools import setup, find_packages

setup(
    name="pagesim",
    version="1.0.0",
    description="Deterministic FIFO, LRU, OPT and CLOCK page-replacement simulator",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="pagesim Authors",
    url="https://github.com/user/pagesim",
    packages=find_packages(exclude=("tests", "benchmarks")),
    python_requires=">=3.8",
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: System :: Operating System",
    ],
    keywords="page replacement, fifo, lru, opt, belady, clock, second chance, simulator",
)
