from timeshell.shell import main_loop

if __name__ == "__main__":
    main_loop()
