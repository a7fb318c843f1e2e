from setuptools import setup, find_packages

setup(
    name="fairgrade",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"webapp": ["templates/*.html", "templates/*/*.html"]},
    include_package_data=True,
    install_requires=[
        "Flask>=2.3",
        "Flask-Login>=0.6.3",
        "Flask-WTF>=1.1",
        "Flask-CORS>=4.0",
        "Flask-SQLAlchemy>=3.0",
        "SQLAlchemy>=2.0",
        "requests>=2.31.0",
        "python-dotenv>=1.0.1",
        "PyMuPDF>=1.23.8",
        "python-docx>=1.1.0",
        "pytesseract>=0.3.10",
        "Pillow>=10.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    python_requires=">=3.8",
    author="FairGrade Team",
    description="A web application that grades scanned exam answers against a rubric",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Framework :: Flask",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
