"""python -m gridedit [config.json]"""

from gridedit.app import main

if __name__ == "__main__":
    main()
