from setuptools import setup, find_packages

setup(
    name="bextract",
    version="1.0.0",
    description="Extract sequences referenced by BLAST hits, padded and filtered by E-value",
    packages=find_packages(include=["bextract", "bextract.*"]),
    install_requires=[
        "biopython",
        "pandas",
        "tqdm",
        "colorama"
    ],
    extras_require={
        "test": [
            "pytest"
        ],
    },
    entry_points={
        'console_scripts': [
            'bextract=bextract.main:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
    python_requires=">=3.8",
)
