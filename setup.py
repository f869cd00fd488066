from setuptools import setup, find_packages

setup(
    name="media-converter",
    version="1.0.0",
    description="Media Converter - Batch-convert audio and video files with FFmpeg!",
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "media-converter=media_converter.cli:main",
        ],
    },
)
