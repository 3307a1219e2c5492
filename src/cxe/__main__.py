from cxe.cli import main

main()
