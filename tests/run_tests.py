import pytest
import sys
from pathlib import Path

def main():
    """Run test suite with coverage for the application packages."""
    test_dir = Path(__file__).parent

    pytest_args = [
        str(test_dir),
        '-v',  # Verbose output
        '--tb=short',  # Shorter traceback format
        '--strict-markers',  # Strict marker validation
        '--durations=10',  # Show 10 slowest tests
        '--cov=models',
        '--cov=services',
        '--cov=utils',
        '--cov=config',
        '--cov=main',
        '--cov-report=term-missing',  # Show missing lines
        '--cov-report=html:coverage_report'  # HTML coverage report
    ]

    exit_code = pytest.main(pytest_args)
    sys.exit(exit_code)

if __name__ == '__main__':
    main()
