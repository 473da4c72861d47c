"""Static guide content.

The bundle is assembled once at import time and shared read-only by the
Textual screen, the CLI renderer, and the chat session (as its system
instruction).
"""

from .models import BuildStep, FlagExplanation, GuideContent

PROJECT_STRUCTURE = """
monai-segmenter/
├── models/
│   └── brain_tumor_model.pth
├── run_segmenter.py
└── requirements.txt
"""

REQUIREMENTS_TXT = """
torch
monai[all]
pyinstaller
"""

PYTHON_SCRIPT = '''
import argparse
import os
import sys
import torch
import monai
from monai.transforms import (
    Compose,
    LoadImaged,
    EnsureChannelFirstd,
    Orientationd,
    Spacingd,
    ScaleIntensityRanged,
    CropForegroundd,
    AsDiscreted,
    SaveImaged,
)
from monai.inferers import sliding_window_inference
from monai.networks.nets import UNet

def resource_path(relative_path: str) -> str:
    """ Get absolute path to resource, works for dev and for PyInstaller """
    try:
        # PyInstaller creates a temp folder and stores path in _MEIPASS
        base_path = sys._MEIPASS
    except Exception:
        base_path = os.path.abspath(".")

    return os.path.join(base_path, relative_path)

def main():
    parser = argparse.ArgumentParser(description="3D Brain Tumor Segmentation Tool")
    parser.add_argument("--input", type=str, required=True, help="Path to the input NIfTI file (.nii.gz)")
    parser.add_argument("--output", type=str, required=True, help="Path to save the output segmentation NIfTI file.")
    args = parser.parse_args()

    print("--- Brain Tumor Segmentation ---")

    # 1. Device Selection
    device = torch.device("cuda" if torch.cuda.is_available() else "cpu")
    print(f"Using device: {device}")

    # 2. Model Definition
    model = UNet(
        spatial_dims=3,
        in_channels=1,
        out_channels=2, # 1 for background, 1 for tumor
        channels=(16, 32, 64, 128, 256),
        strides=(2, 2, 2, 2),
        num_res_units=2,
    ).to(device)

    # 3. Load Pre-trained Weights
    model_path = resource_path("models/brain_tumor_model.pth")
    print(f"Loading model from: {model_path}")
    if not os.path.exists(model_path):
        print(f"Error: Model file not found at {model_path}. Make sure it's bundled correctly.")
        # As we can't create a dummy model file, we'll exit if it doesn't exist.
        # In a real build, PyInstaller ensures this file is present.
        print("This is a placeholder script. In a real scenario, you'd place your trained model file here.")
        # Create a dummy file for demonstration purposes if it doesn't exist.
        # THIS IS FOR DEMO ONLY. REMOVE IN PRODUCTION.
        print("Creating a dummy model file for demonstration...")
        os.makedirs(os.path.dirname(model_path), exist_ok=True)
        dummy_state_dict = model.state_dict()
        torch.save(dummy_state_dict, model_path)
        print(f"Dummy model saved to {model_path}")

    model.load_state_dict(torch.load(model_path, map_location=device))
    model.eval()

    # 4. Define Pre-processing Transforms
    val_transforms = Compose(
        [
            LoadImaged(keys=["image"]),
            EnsureChannelFirstd(keys=["image"]),
            Orientationd(keys=["image"], axcodes="RAS"),
            Spacingd(keys=["image"], pixdim=(1.0, 1.0, 1.0), mode=("bilinear")),
            ScaleIntensityRanged(
                keys=["image"], a_min=-1000, a_max=1000, b_min=0.0, b_max=1.0, clip=True
            ),
            CropForegroundd(keys=["image"], source_key="image"),
        ]
    )

    # 5. Define Post-processing Transforms
    # The output of the model is logits. We need to convert it to a discrete mask.
    post_transforms = Compose([
        AsDiscreted(keys=["pred"], argmax=True),
        SaveImaged(keys=["pred"], meta_keys=["image_meta_dict"], output_dir=os.path.dirname(args.output), output_postfix="", output_ext=".nii.gz", resample=False, separate_folder=False, print_log=False, output_name=os.path.basename(args.output).split('.')[0]),
    ])

    # 6. Load and Process Data
    file_list = [{"image": args.input}]

    # Apply pre-processing
    print(f"Processing input file: {args.input}")
    val_data = val_transforms(file_list[0])
    val_image = val_data["image"].unsqueeze(0).to(device) # Add batch dimension

    # 7. Run Inference
    print("Running sliding window inference...")
    with torch.no_grad():
        roi_size = (128, 128, 128)
        sw_batch_size = 4
        val_output = sliding_window_inference(val_image, roi_size, sw_batch_size, model)

    # Create a dictionary for post-processing
    result_data = {
        "pred": val_output.squeeze(0), # Remove batch dimension
        "image_meta_dict": val_data["image_meta_dict"]
    }

    # 8. Apply Post-processing and Save
    print(f"Saving segmentation mask to: {args.output}")
    post_transforms(result_data)

    print("--- Segmentation complete! ---")


if __name__ == "__main__":
    main()
'''

PYINSTALLER_COMMAND = """
pyinstaller --name BrainSegmenter --onefile --console --add-data "models/brain_tumor_model.pth:models" run_segmenter.py
"""

PYINSTALLER_FLAGS = (
    FlagExplanation(
        flag="--name BrainSegmenter",
        description="Sets the name of the final executable file.",
    ),
    FlagExplanation(
        flag="--onefile",
        description="Packages everything into a single executable file, rather than a folder.",
    ),
    FlagExplanation(
        flag="--console",
        description="Creates a command-line application that opens a terminal window when run.",
    ),
    FlagExplanation(
        flag='--add-data "source:destination"',
        description=(
            "Bundles non-code files. Here, it takes the local 'models/brain_tumor_model.pth' "
            "file and places it in a 'models' folder inside the packaged app's temporary "
            "directory. The separator is ':' on Linux/macOS and ';' on Windows."
        ),
    ),
)

BUILD_STEPS = (
    BuildStep(
        title="Set Up Project Directory",
        description=(
            "Create the folder structure as shown in Section 1. Place your pre-trained "
            "`brain_tumor_model.pth` inside the `models/` sub-directory."
        ),
    ),
    BuildStep(
        title="Create Core Files",
        description=(
            "Create the `run_segmenter.py` and `requirements.txt` files in your project's "
            "root directory. Copy the code from Sections 2 and 3 into them."
        ),
    ),
    BuildStep(
        title="Create a Virtual Environment",
        description=(
            "It's best practice to isolate your project's dependencies. Open a terminal "
            "in your project directory and run:"
        ),
        code=(
            "python -m venv venv\n"
            "source venv/bin/activate  # On macOS/Linux\n"
            ".\\venv\\Scripts\\activate  # On Windows"
        ),
    ),
    BuildStep(
        title="Install Dependencies",
        description="Install all the required libraries from your `requirements.txt` file using pip:",
        code="pip install -r requirements.txt",
    ),
    BuildStep(
        title="Run the PyInstaller Build Command",
        description=(
            "Execute the build command from Section 4 in your terminal. This process may "
            "take a few minutes as it collects all dependencies and packages them."
        ),
        code=PYINSTALLER_COMMAND.strip(),
    ),
    BuildStep(
        title="Locate Your Executable",
        description=(
            "PyInstaller will create a `dist/` folder in your project directory. Inside, "
            "you will find your standalone executable: `BrainSegmenter` (or "
            "`BrainSegmenter.exe` on Windows)."
        ),
    ),
)

USAGE_INSTRUCTIONS = r"""
# On macOS or Linux
./BrainSegmenter --input /path/to/patient/scan.nii.gz --output /path/to/save/segmentation.nii.gz

# On Windows
BrainSegmenter.exe --input C:\path\to\patient\scan.nii.gz --output C:\path\to\save\segmentation.nii.gz
"""

USAGE_EXPLANATION = """
The tool requires two arguments: --input, which is the path to the NIfTI scan you want to process, and --output, which is the full path where you want to save the resulting segmentation mask file.
"""

# Section numbers are referenced by the build steps ("as shown in Section 1").
SECTION_TITLES = (
    "1. Final Project Directory Structure",
    "2. The requirements.txt File",
    "3. The Core Python Script (run_segmenter.py)",
    "4. The PyInstaller Build Command",
    "5. Step-by-Step Build Instructions",
    "6. Usage Instructions for the End-User",
)

GUIDE = GuideContent(
    title="From .pth to .exe",
    subtitle="Your MONAI Deployment Guide for MLOps Engineers",
    project_structure=PROJECT_STRUCTURE,
    requirements_txt=REQUIREMENTS_TXT,
    python_script=PYTHON_SCRIPT,
    pyinstaller_command=PYINSTALLER_COMMAND,
    pyinstaller_flags=PYINSTALLER_FLAGS,
    build_steps=BUILD_STEPS,
    usage_instructions=USAGE_INSTRUCTIONS,
    usage_explanation=USAGE_EXPLANATION,
)


def build_guide_context(guide: GuideContent) -> str:
    """Assemble the system instruction that pins the assistant to the guide.

    Args:
        guide: Content bundle to embed

    Returns:
        A single prompt string containing every section of the guide
    """
    flags = "\n".join(f"- **{item.flag}**: {item.description}" for item in guide.pyinstaller_flags)
    steps = "\n".join(
        f"{number}.  **{step.title}**: {step.description}"
        for number, step in enumerate(guide.build_steps, 1)
    )

    return f"""
You are an expert MLOps assistant specialized in deploying PyTorch models.
Your knowledge base is strictly limited to the following technical guide on packaging a 3D MONAI segmentation model into a command-line executable using PyInstaller.
When a user asks a question, you must answer based *only* on the information provided in this guide.
Do not invent features, libraries, or steps not mentioned here.
If the user's question is outside the scope of this guide, politely state that you can only answer questions related to the provided MONAI deployment guide.

Here is the guide content:

---

### {SECTION_TITLES[0]}
{guide.project_structure}

### {SECTION_TITLES[1]}
{guide.requirements_txt}

### {SECTION_TITLES[2]}
```python
{guide.python_script}
```

### {SECTION_TITLES[3]}
```bash
{guide.pyinstaller_command}
```
**Explanation of flags:**
{flags}

### {SECTION_TITLES[4]}
{steps}

### {SECTION_TITLES[5]}
```bash
{guide.usage_instructions}
```
{guide.usage_explanation}
---
"""


GUIDE_CONTEXT = build_guide_context(GUIDE)
