from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="feature2docx",
    version="1.0.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="Convert Gherkin .feature files into Word summary tables",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/feature2docx",
    packages=find_packages(exclude=["tests", "tests.*", "docs"]),
    py_modules=["run"],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Testing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "flask>=3.0.0",
        "python-docx>=1.1.0",
        "pyyaml>=6.0.1",
        "click>=8.1.7",
        "jinja2>=3.1.2",
        "colorama>=0.4.6",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.3",
        ],
        "dev": [
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "black>=23.10.0",
            "flake8>=6.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "feature2docx=run:main",
        ],
    },
    include_package_data=True,
    package_data={
        "feature2docx": ["web/templates/*.html"],
    },
    project_urls={
        "Bug Reports": "https://github.com/yourusername/feature2docx/issues",
        "Source": "https://github.com/yourusername/feature2docx",
    },
    keywords="bdd gherkin cucumber feature docx word report",
    license="MIT",
)
