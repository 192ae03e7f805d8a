"""GST Calc - Goods and Services Tax calculator."""
from setuptools import setup, find_packages

setup(
    name="gst-calc",
    version="1.0.0",
    description="GST calculator with CGST/SGST/IGST breakdown and recent history",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={
        "gst_calc": ["templates/*"],
    },
    install_requires=[
        "click>=8.1.0",
        "jinja2>=3.1.0",
        "rich>=13.0.0",
        "questionary>=2.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "gst-calc=gst_calc.cli:main",
        ],
    },
    python_requires=">=3.10",
)
