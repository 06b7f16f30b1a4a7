from fingertip_mcp.server import main

main()
