"""feature2docx - convert Gherkin .feature files into Word summary tables"""

__version__ = "1.0.0"
