from setuptools import setup, find_packages

setup(
    name="gravnav",
    version="0.1.0",
    description="Gravity-aware grid navigation: reachability, jump arcs and A* over (x, y, gravity) states",
    python_requires=">=3.8",
    packages=find_packages(include=["gravnav", "gravnav.*"]),
    install_requires=[
        "numpy",
        "networkx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "gravnav=gravnav.cli:main",
        ],
    },
    zip_safe=False,
)
