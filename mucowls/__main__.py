"""
Executed when running: python -m mucowls
"""
from mucowls.main import main

if __name__ == "__main__":
    main()
