from deskshell.cli import main

main()
