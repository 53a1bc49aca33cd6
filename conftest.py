# Puts the project root on sys.path so that tests can import `tests.*`
