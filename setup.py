from pathlib import Path

from setuptools import find_packages, setup

here = Path(__file__).parent
readme = (here / "README.md").read_text(encoding="utf-8") if (here / "README.md").exists() else ""

setup(
    name="upload-metrics",
    version="0.1.0",
    description="Free space and system health estimates for upload-handling services",
    long_description=readme,
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=1.10",
        "PyYAML>=6.0",
        "psutil>=5.9",
        "humanize>=4.0",
    ],
    extras_require={
        "dev": ["pytest>=7.4"],
    },
    entry_points={
        "console_scripts": [
            "upload-metrics=upload_metrics.app:main",
        ]
    },
    include_package_data=True,
)
