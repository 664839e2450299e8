from deskshell.mcp.server import main

main()
