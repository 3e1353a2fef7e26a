from cellpad.adapters.textual.app import main

main()
