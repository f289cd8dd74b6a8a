from plsr_task import main

main()
