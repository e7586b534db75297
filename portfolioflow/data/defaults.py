"""
Seed content used whenever the database is empty or unreachable.
"""

from portfolioflow.utils.models import Project, ResumeData

CATEGORIES = ["Web Development", "3D Graphics", "AI Integration", "Mobile App"]

ALL_TECHNOLOGIES = [
    "React", "Next.js", "Three.js", "TypeScript", "Node.js", "Python",
    "FastAPI", "Tailwind CSS", "SQLAlchemy", "Swift", "Kotlin", "HTML",
    "CSS", "JavaScript", "Ollama",
]

PLACEHOLDER_IMAGE_URL = "https://placehold.co/600x400.png"

DEFAULT_PROJECT = Project(
    id="default-project-1",
    title="Sample Project: Interactive Model",
    description="This placeholder project showcases an interactive 3D model display.",
    long_description=(
        "This sample project demonstrates how 3D models can be displayed in "
        "project cards. It includes a title, description, model URL, category, "
        "and technologies. Replace it with your own projects from the admin "
        "panel. This model is a simple wooden crate."
    ),
    image_url=PLACEHOLDER_IMAGE_URL,
    model="/models/wooden_crate.glb",
    data_ai_hint="3d crate",
    category="3D Graphics",
    technologies=["Three.js", "React"],
    live_link="#",
    source_link="#",
)

DEFAULT_RESUME_DATA = ResumeData.model_validate({
    "summaryItems": [
        "IT student skilled in web dev, data structures, C++, Java, Python, JavaScript.",
        "Proficient in Machine Learning, 3D Modeling (Blender/Unity), SQL.",
        "Practical experience in 3D design, video/image editing, and hardware.",
        "Proactive leader, eager for challenges and driving innovative solutions.",
    ],
    "skills": [
        {"name": "Web Development (React/Next.js)", "level": 90},
        {"name": "JavaScript & Python", "level": 85},
        {"name": "Data Structures & Algorithms", "level": 85},
        {"name": "C/C++ & Java", "level": 75},
        {"name": "SQL & Databases", "level": 80},
        {"name": "3D Modeling (Blender, Unity)", "level": 85},
        {"name": "Machine Learning Concepts", "level": 70},
        {"name": "Video/Image Editing", "level": 70},
        {"name": "Computer Hardware Basics", "level": 65},
        {"name": "Leadership & Problem Solving", "level": 90},
    ],
    "education": [
        {
            "degree": "B.Tech Information Technology",
            "institution": "College of Engineering Guindy, Anna University",
            "dates": "2021 - Present",
            "description": "Practicing various domains of information services and technologies.",
        },
    ],
    "experience": [
        {
            "jobTitle": "Placeholder Senior Developer",
            "company": "Tech Solutions Inc.",
            "dates": "Jan 2021 - Present",
            "responsibilities": [
                "Led development of key features for a flagship product, improving performance by 20%.",
                "Mentored junior developers and contributed to best practices for code quality.",
                "Integrated Three.js for interactive 3D product demos on the company website.",
            ],
        },
        {
            "jobTitle": "Placeholder Web Developer",
            "company": "Creative Agency LLC",
            "dates": "Jun 2018 - Dec 2020",
            "responsibilities": [
                "Developed and maintained client websites using React and Node.js.",
                "Collaborated with designers to implement responsive and user-friendly interfaces.",
            ],
        },
    ],
    "awards": [
        {
            "title": "Placeholder Next.js Developer Certification",
            "issuer": "Vercel Academy",
            "date": "2023",
            "url": "https://example.com/cert/nextjs",
        },
        {
            "title": "Placeholder Innovation Award",
            "issuer": "Tech Solutions Inc.",
            "date": "2022",
        },
    ],
    "instagramUrl": "https://www.instagram.com/mytreyn",
    "githubUrl": "https://github.com/mytreyanjp",
    "linkedinUrl": "https://www.linkedin.com/in/mytreyan-jp-49226a2a7/",
    "resumePdfUrl": "https://example.com/placeholder-resume.pdf",
})
