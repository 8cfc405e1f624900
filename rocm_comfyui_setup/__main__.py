from rocm_comfyui_setup.cli import main

main()
