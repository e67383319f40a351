"""Deterministic synthetic output for demo credentials and exhausted plans.

Every text this module produces carries DEMO_MARKER, and every structured
result has ``demo=True``, so callers can label it. Output depends only on
the task input: no randomness, no clock, no network.
"""

from __future__ import annotations

import json
import math
import re

from skknpro.models.appraisal import (
    APPRAISAL_RUBRIC,
    AppraisalCriterion,
    AppraisalResult,
    AppraisalWarnings,
    ReviewParagraph,
    SpellingError,
    UpgradePlan,
    WarningNote,
)
from skknpro.models.inputs import AppraisalInput, AwardTier, TitleTopic, award_tier
from skknpro.models.title_analysis import (
    AlternativeTitle,
    ClarityScore,
    DatabaseLayer,
    ExpertLayer,
    FeasibilityScore,
    LayerAnalysis,
    NoveltyScore,
    OnlineLayer,
    SpecificityScore,
    TitleAnalysis,
    TitleCriteria,
    TitleStructure,
    grade_for_score,
)
from skknpro.observability.logging import get_logger
from skknpro.providers.base import StageKind

log = get_logger(__name__)

DEMO_MARKER = "[DEMO MODE]"

STRUCTURED_STAGES: frozenset[StageKind] = frozenset(
    {StageKind.TITLE_ANALYSIS, StageKind.APPRAISAL}
)

_VAGUE_PATTERN = re.compile(r"một số|nâng cao|góp phần|cải thiện|tăng cường")
_TOOL_PATTERN = re.compile(
    r"\b(kahoot|quizizz|canva|padlet|mindmap|ai|chatgpt|stem|pbl|video|e-learning)\b",
    re.IGNORECASE,
)
_GOAL_PATTERN = re.compile(r"tăng \d+%|giảm \d+%|đạt \d+|nâng điểm")
_ACTION_PATTERN = re.compile(
    r"^(Ứng dụng|Xây dựng|Thiết kế|Phát triển|Sử dụng|Tổ chức|Nâng cao|Một số)",
    re.IGNORECASE,
)

_AWARD_MULTIPLIERS: dict[AwardTier, float] = {
    AwardTier.NATIONAL: 0.85,
    AwardTier.PROVINCIAL: 0.90,
    AwardTier.DISTRICT: 0.95,
    AwardTier.SCHOOL: 1.0,
}

# Base scores per rubric id before the award multiplier
_APPRAISAL_BASE_SCORES: dict[str, int] = {"1": 18, "2": 16, "3": 22, "4": 12}


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class DemoResponder:
    """Produce clearly-labelled stand-in results for every stage kind.

    Never raises for a supported stage and never touches the network.
    """

    def respond(self, stage: StageKind, task: object = None) -> str:
        """Plain-text demo output for ``stage``.

        Structured stages return the JSON text of :meth:`respond_structured`,
        so the result goes through the same parser as a live response.
        """
        log.debug("demo_response", stage=str(stage))
        if stage in STRUCTURED_STAGES:
            result = self.respond_structured(stage, task)
            return json.dumps(result.to_json_dict(), ensure_ascii=False, indent=2)

        renderers = {
            StageKind.OUTLINE: self._outline,
            StageKind.PART_1: self._part_1,
            StageKind.PART_2_3: self._part_2_3,
            StageKind.EVALUATION: self._evaluation,
            StageKind.PLAGIARISM: self._plagiarism,
            StageKind.FULL_REPORT: self._full_report,
            StageKind.CONNECTION_TEST: self._connection_test,
        }
        return renderers[stage](task)

    def respond_structured(
        self, stage: StageKind, task: object = None
    ) -> TitleAnalysis | AppraisalResult:
        """Structured demo output for title analysis or appraisal.

        Raises:
            ValueError: If ``stage`` has no structured result.
        """
        if stage is StageKind.TITLE_ANALYSIS:
            topic = task if isinstance(task, TitleTopic) else TitleTopic(title=_title_of(task))
            return demo_title_analysis(topic)
        if stage is StageKind.APPRAISAL:
            appraisal = (
                task if isinstance(task, AppraisalInput) else AppraisalInput(title=_title_of(task))
            )
            return demo_appraisal(appraisal)
        raise ValueError(f"Stage '{stage}' has no structured demo output")

    # -- plain-text stages ---------------------------------------------------

    def _outline(self, task: object) -> str:
        title = _title_of(task)
        subject = getattr(task, "subject", "") or "môn học"
        grade = getattr(task, "grade", "") or "Không xác định"
        return f"""{DEMO_MARKER} Dàn ý mẫu, chưa được tạo bởi AI.

**Đề tài:** {title}
**Môn học:** {subject} | **Khối lớp:** {grade}

**PHẦN I: LÝ DO CHỌN ĐỀ TÀI** (1000-1500 từ)
1.1. Cơ sở lý luận: Nghị quyết 29-NQ/TW, Luật Giáo dục 2019, lý thuyết kiến tạo
1.2. Cơ sở thực tiễn: yêu cầu đổi mới dạy học {subject}
1.3. Lý do cá nhân chọn đề tài

**PHẦN II: THỰC TRẠNG VẤN ĐỀ** (1200-1500 từ)
2.1. Đối tượng, phạm vi nghiên cứu
2.2. Thực trạng trước khi áp dụng (giáo viên, học sinh, cơ sở vật chất)
2.3. Số liệu khảo sát ban đầu
2.4. Nguyên nhân của thực trạng

**PHẦN III: CÁC GIẢI PHÁP THỰC HIỆN** (2000-2500 từ)
3.1. Giải pháp 1: Thiết kế hoạt động khởi động gắn với thực tiễn
3.2. Giải pháp 2: Tổ chức học tập hợp tác theo nhóm
3.3. Giải pháp 3: Đánh giá thường xuyên bằng công cụ số

**PHẦN IV: HIỆU QUẢ CỦA SÁNG KIẾN** (1000-1200 từ)
**PHẦN V: KẾT LUẬN VÀ KIẾN NGHỊ** (800-1000 từ)
**TÀI LIỆU THAM KHẢO** (tối thiểu 10 nguồn)"""

    def _part_1(self, task: object) -> str:
        subject = getattr(task, "subject", "") or "môn học"
        return f"""{DEMO_MARKER} Nội dung mẫu cho Phần I và Phần II.

## PHẦN I: LÝ DO CHỌN ĐỀ TÀI

### 1. Cơ sở lý luận
Nghị quyết 29-NQ/TW đặt yêu cầu chuyển mạnh quá trình giáo dục từ chủ yếu trang bị kiến thức sang phát triển toàn diện năng lực và phẩm chất người học. Chương trình GDPT 2018 cụ thể hóa định hướng này cho môn {subject}.

### 2. Cơ sở thực tiễn
Qua nhiều năm giảng dạy, tác giả nhận thấy học sinh còn thụ động, ít có cơ hội vận dụng kiến thức vào tình huống thực tế.

## PHẦN II: THỰC TRẠNG VẤN ĐỀ

### Số liệu khảo sát ban đầu

| STT | Nội dung khảo sát | Số lượng | Tỷ lệ % | Đánh giá |
|-----|-------------------|----------|---------|----------|
| 1 | Học sinh hứng thú với môn học | 18/60 | 30,0% | Thấp |
| 2 | Học sinh đạt điểm Khá, Giỏi | 24/60 | 40,0% | Trung bình |
| 3 | Học sinh chủ động phát biểu | 12/60 | 20,0% | Thấp |

Tiểu kết: thực trạng trên đặt ra yêu cầu cấp thiết phải đổi mới phương pháp dạy học."""

    def _part_2_3(self, task: object) -> str:
        return f"""{DEMO_MARKER} Nội dung mẫu cho Phần III, IV và V.

## PHẦN III: CÁC GIẢI PHÁP THỰC HIỆN

**Giải pháp 1: Thiết kế hoạt động khởi động gắn với thực tiễn**
Mục tiêu: tạo hứng thú và kết nối kiến thức mới với trải nghiệm của học sinh.

**Giải pháp 2: Tổ chức học tập hợp tác theo nhóm**
Mục tiêu: phát triển năng lực giao tiếp và hợp tác.

**Giải pháp 3: Đánh giá thường xuyên bằng công cụ số**
Mục tiêu: phản hồi kịp thời, theo dõi sự tiến bộ của từng học sinh.

## PHẦN IV: HIỆU QUẢ CỦA SÁNG KIẾN

| Chỉ tiêu | Trước áp dụng | Sau áp dụng | Chênh lệch |
|----------|---------------|-------------|------------|
| Giỏi | 15,0% | 30,0% | +15,0% |
| Khá | 25,0% | 40,0% | +15,0% |
| Trung bình | 45,0% | 27,0% | -18,0% |
| Yếu | 15,0% | 3,0% | -12,0% |

## PHẦN V: KẾT LUẬN VÀ KIẾN NGHỊ
Các giải pháp đã góp phần nâng cao chất lượng học tập và có khả năng nhân rộng trong nhà trường.

## TÀI LIỆU THAM KHẢO
1. Bộ GD&ĐT (2018). Chương trình giáo dục phổ thông tổng thể.
2. Ban Chấp hành Trung ương (2013). Nghị quyết 29-NQ/TW."""

    def _evaluation(self, task: object) -> str:
        return f"""{DEMO_MARKER} Kết quả đánh giá mẫu, chưa được chấm bởi AI.

**1. TỔNG KẾT ĐÁNH GIÁ**
- Điểm tổng: 72/100
- Xếp loại: Khá
- Nhận xét: {_describe_submission(task)} có cấu trúc đầy đủ, cần bổ sung số liệu minh chứng.

**2. ĐIỂM CHI TIẾT TỪNG TIÊU CHÍ**

| Tiêu chí | Điểm tối đa | Điểm đạt | Nhận xét ngắn |
|----------|-------------|----------|---------------|
| Tính mới, sáng tạo | 20 | 14 | Có cải tiến, chưa nổi bật |
| Tính khoa học, logic | 20 | 15 | Cơ sở lý luận còn mỏng |
| Tính thực tiễn, khả thi | 20 | 16 | Phù hợp điều kiện thực tế |
| Hiệu quả đạt được | 20 | 13 | Thiếu nhóm đối chứng |
| Hình thức trình bày | 20 | 14 | Còn lỗi chính tả |

**3. ĐỀ XUẤT CẢI THIỆN**
- Bổ sung bảng so sánh trước/sau có kiểm định thống kê.
- Trích dẫn nguồn theo chuẩn APA."""

    def _plagiarism(self, task: object) -> str:
        return f"""{DEMO_MARKER} Kết quả kiểm tra đạo văn mẫu, chưa được phân tích bởi AI.

**1. ĐÁNH GIÁ TỔNG QUAN**
- Tỷ lệ độc đáo ước tính: 78%
- Mức độ rủi ro: Trung bình
- Nhận xét: {_describe_submission(task)} có một số đoạn định nghĩa chưa ghi nguồn.

**2. CÁC ĐOẠN CÓ VẤN ĐỀ**
- Phần I, mục 1: định nghĩa khái niệm chưa trích dẫn (mức độ 3/5)
- Phần III: mô tả công cụ giống tài liệu hướng dẫn trên mạng (mức độ 2/5)

**3. HƯỚNG DẪN KHẮC PHỤC**
- Diễn đạt lại bằng ngôn ngữ của tác giả, bổ sung số liệu thực tế tại đơn vị."""

    def _full_report(self, task: object) -> str:
        title = _title_of(task)
        author = getattr(task, "author_name", "") or "(Họ và tên tác giả)"
        school = getattr(task, "school_name", "") or "(Đơn vị công tác)"
        subject = getattr(task, "subject", "") or "môn học"
        sample = getattr(task, "sample_size", "") or "60"
        duration = getattr(task, "duration", "") or "1 học kỳ (16 tuần)"
        return f"""{DEMO_MARKER} Bản SKKN mẫu, chưa được viết bởi AI.

SÁNG KIẾN KINH NGHIỆM

{title.upper()}

Họ và tên: {author}
Đơn vị công tác: {school}

PHẦN MỞ ĐẦU
I. Lý do chọn đề tài
Đổi mới phương pháp dạy học {subject} theo Chương trình GDPT 2018 là yêu cầu cấp thiết.

II. Mục đích nghiên cứu
Nâng tỷ lệ học sinh đạt Khá, Giỏi lên ít nhất 15% sau {duration}.

PHẦN NỘI DUNG
Chương I: Cơ sở lý luận và thực tiễn
Chương II: Giải pháp và quy trình thực hiện
Chương III: Thực nghiệm sư phạm trên {sample} học sinh

| Nhóm | Điểm TB trước | Điểm TB sau |
|------|---------------|-------------|
| Thực nghiệm | 6,4 | 7,6 |
| Đối chứng | 6,5 | 6,8 |

PHẦN KẾT LUẬN
Giải pháp mang lại hiệu quả rõ rệt và có khả năng nhân rộng."""

    def _connection_test(self, task: object) -> str:
        return f"{DEMO_MARKER} Kết nối thành công (chế độ demo)."


def _title_of(task: object) -> str:
    return str(getattr(task, "title", "") or "Đề tài chưa đặt tên")


def _describe_submission(task: object) -> str:
    attachment = getattr(task, "attachment", None)
    if attachment is not None:
        return f'Tệp "{attachment.name}"'
    content = getattr(task, "content", "") or ""
    return f"Bản SKKN ({len(content)} ký tự)"


# ---------------------------------------------------------------------------
# Structured demo builders
# ---------------------------------------------------------------------------


def demo_title_analysis(topic: TitleTopic) -> TitleAnalysis:
    """Heuristic title analysis driven by vague-phrase, tool and goal checks."""
    title = topic.title
    lowered = title.lower()
    has_vague = _VAGUE_PATTERN.search(lowered) is not None
    tool_match = _TOOL_PATTERN.search(title)
    has_goal = _GOAL_PATTERN.search(lowered) is not None
    subject = topic.subject
    grade_level = topic.grade_level

    if tool_match:
        split = (18, 20, 18, 16)
    elif has_vague:
        split = (9, 11, 15, 10)
    else:
        split = (12, 14, 17, 12)
    score = sum(split)

    criteria = TitleCriteria(
        specificity=SpecificityScore(
            score=split[0],
            comment="Đã nêu công cụ cụ thể" if tool_match else "Thiếu công cụ/phương pháp cụ thể",
        ),
        novelty=NoveltyScore(
            score=split[1],
            comment="Hướng tiếp cận bắt kịp xu hướng" if tool_match else "Góc nhìn còn quen thuộc",
        ),
        feasibility=FeasibilityScore(score=split[2], comment="Có thể triển khai tại đơn vị"),
        clarity=ClarityScore(
            score=split[3],
            comment="Cụm từ sáo rỗng làm giảm độ rõ ràng" if has_vague else "Tương đối rõ ràng",
        ),
    )

    action_match = _ACTION_PATTERN.search(title)
    structure = TitleStructure(
        action=action_match.group(0) if action_match else "Chưa rõ động từ hành động",
        tool=(
            tool_match.group(0).upper()
            if tool_match
            else "⚠️ THIẾU - Không xác định được công cụ/phương pháp cụ thể"
        ),
        subject=subject or "Chưa xác định rõ môn học/lĩnh vực",
        scope=grade_level or "Chưa rõ phạm vi áp dụng",
        goal=(
            "Có mục tiêu đo lường được"
            if has_goal
            else "⚠️ Mục tiêu còn chung chung, thiếu chỉ số đo lường"
        ),
    )

    issues: list[str] = []
    if has_vague:
        issues.append(
            "🔴 NGHIÊM TRỌNG [Điều 6.1 - TT27/2020]: Cụm từ 'một số biện pháp/nâng cao chất lượng' "
            "vi phạm nguyên tắc CỤ THỂ HÓA. Tên đề tài phải xác định rõ giải pháp được áp dụng."
        )
    if not tool_match:
        issues.append(
            "🔴 NGHIÊM TRỌNG [Tiêu chí Tính mới]: Thiếu CÔNG CỤ/PHƯƠNG PHÁP/MÔ HÌNH cụ thể."
        )
    if not has_goal:
        issues.append(
            "🟡 CẢNH BÁO [Đo lường hiệu quả]: Mục tiêu 'nâng cao/cải thiện' không đo lường được. "
            "Cần chỉ số cụ thể, ví dụ 'Tăng tỷ lệ HS hứng thú từ 40% lên 80%'."
        )
    issues.append(
        "🟢 GỢI Ý: Tích hợp chuyển đổi số hoặc phát triển năng lực người học theo GDPT 2018."
    )

    subject_name = subject or "học"
    subject_label = subject or "môn học"
    alternatives = [
        AlternativeTitle(
            title=(
                f"Ứng dụng trí tuệ nhân tạo ChatGPT hỗ trợ thiết kế hoạt động học tập cá nhân hóa "
                f"môn {subject_name} cho học sinh {grade_level}"
            ).strip(),
            reason="✅ Công nghệ AI | ✅ Cá nhân hóa học tập | ✅ Đo lường qua pre-test/post-test",
            score=92,
            tags=["AI/ChatGPT", "Cá nhân hóa", "Chuyển đổi số"],
        ),
        AlternativeTitle(
            title=(
                f"Thiết kế hệ thống học liệu số tương tác bằng Canva + Loom theo mô hình "
                f"Flipped Classroom cho {subject_label} {grade_level}"
            ).strip(),
            reason="✅ Công cụ miễn phí | ✅ Mô hình được quốc tế công nhận | ✅ Sản phẩm cụ thể",
            score=88,
            tags=["E-Learning", "Flipped Classroom", "Học liệu số"],
        ),
        AlternativeTitle(
            title=(
                f"Xây dựng hệ thống đánh giá thường xuyên qua Kahoot! và Quizizz phát triển năng lực "
                f"tự học môn {subject_name} {grade_level}"
            ).strip(),
            reason="✅ Game hóa học tập | ✅ Dữ liệu đo lường từ nền tảng | ✅ Đánh giá vì sự tiến bộ",
            score=86,
            tags=["Gamification", "EdTech", "Đánh giá thường xuyên"],
        ),
        AlternativeTitle(
            title=(
                f"Phát triển ngân hàng Sơ đồ tư duy số hóa bằng MindMeister rèn luyện kỹ năng "
                f"tư duy hệ thống trong {subject_label}"
            ),
            reason="✅ Kỹ năng thế kỷ 21 | ✅ Công cụ số hóa cụ thể | ✅ Đánh giá qua rubric",
            score=84,
            tags=["Mindmap", "Tư duy hệ thống", "Số hóa"],
        ),
        AlternativeTitle(
            title=(
                f"Tổ chức dạy học dự án (PBL) tích hợp STEM phát triển năng lực giải quyết vấn đề "
                f"cho học sinh {grade_level}"
            ).strip(),
            reason="✅ PBL được quốc tế công nhận | ✅ STEM là xu hướng | ✅ Đo lường qua sản phẩm",
            score=85,
            tags=["PBL", "STEM/STEAM", "Năng lực GQVĐ"],
        ),
    ]

    if has_vague:
        estimated, popularity = 12500, "Rất phổ biến"
    elif tool_match:
        estimated, popularity = 5600, "Khá phổ biến"
    else:
        estimated, popularity = 3400, "Trung bình"

    layer_analysis = LayerAnalysis(
        layer1_database=DatabaseLayer(
            duplicate_level="high" if has_vague else "medium",
            similar_titles=[
                f"Một số biện pháp nâng cao chất lượng dạy học {subject_label}",
                f"Ứng dụng công nghệ thông tin trong dạy học {subject_label}",
            ],
        ),
        layer2_online=OnlineLayer(estimated_results=estimated, popularity_level=popularity),
        layer3_expert=ExpertLayer(
            expert_verdict=(
                "Có tiềm năng nhưng cần chỉnh sửa"
                if score >= 70
                else "Cần sửa đổi căn bản trước khi nộp"
            ),
            recommendations=[
                "Xác định rõ 1-2 công cụ/phương pháp sẽ áp dụng",
                "Bổ sung chỉ số đo lường cụ thể (tăng X%, giảm Y%)",
            ],
        ),
    )

    conclusion = (
        f'{DEMO_MARKER} Đề tài "{title}" đạt {score}/100 điểm theo phân tích mẫu. '
        f"Tham khảo 5 đề xuất thay thế ở trên, điểm dự kiến 84-92/100."
    )

    return TitleAnalysis(
        score=score,
        grade=grade_for_score(score),
        criteria=criteria,
        structure=structure,
        issues=issues,
        alternatives=alternatives,
        related_topics=[
            "🔥 Trí tuệ nhân tạo trong giáo dục",
            "📱 Chuyển đổi số trong nhà trường",
            "🎮 Gamification & Game-based Learning",
            "🔄 Flipped Classroom - Lớp học đảo ngược",
            "🧪 STEM/STEAM Education",
        ],
        layer_analysis=layer_analysis,
        conclusion=conclusion,
        demo=True,
    )


def demo_appraisal(task: AppraisalInput) -> AppraisalResult:
    """Rubric appraisal scaled down for more demanding award tiers."""
    multiplier = _AWARD_MULTIPLIERS[award_tier(task.award_goal)]
    subject = task.subject or "bộ môn"
    award_goal = task.award_goal or "Cấp Trường"

    strengths = {
        "1": f"📌 Có ý tưởng ứng dụng công nghệ trong giảng dạy {subject}, bắt kịp xu hướng chuyển đổi số.",
        "2": "📌 Cấu trúc tuân thủ mẫu SKKN, có cơ sở lý luận và cơ sở thực tiễn.",
        "3": "📌 Có số liệu so sánh trước/sau áp dụng giải pháp.",
        "4": "📌 Trình bày đúng cấu trúc, ngôn ngữ rõ ràng.",
    }
    weaknesses = {
        "1": "⚠️ 🔴 Chưa chỉ ra điểm khác biệt cốt lõi so với các SKKN cùng chủ đề.",
        "2": "⚠️ 🔴 Cơ sở lý luận mỏng, thiếu khung lý thuyết và mô tả phương pháp nghiên cứu.",
        "3": (
            f"⚠️ 🔴 Mẫu nghiên cứu chưa đủ độ tin cậy cho {award_goal}; "
            "thiếu kiểm định t-test và nhóm đối chứng chuẩn."
        ),
        "4": "⚠️ 🟡 Còn lỗi chính tả, bảng biểu thiếu tiêu đề và nguồn số liệu.",
    }

    criteria = [
        AppraisalCriterion(
            id=rubric.id,
            name=rubric.name,
            score=_round_half_up(_APPRAISAL_BASE_SCORES[rubric.id] * multiplier),
            max=rubric.max,
            strengths=strengths[rubric.id],
            weaknesses=weaknesses[rubric.id],
            color=rubric.color,
        )
        for rubric in APPRAISAL_RUBRIC
    ]

    return AppraisalResult(
        total_score=sum(c.score for c in criteria),
        criteria=criteria,
        warnings=AppraisalWarnings(
            duplicate=WarningNote(
                level="Trung bình - Cần lưu ý",
                text=(
                    f"{DEMO_MARKER} 🔍 Một số đoạn có cấu trúc giống các SKKN mẫu phổ biến. "
                    "Cần viết lại bằng góc nhìn cá nhân tại đơn vị."
                ),
            ),
            plagiarism=WarningNote(
                level="Cảnh báo - Cần xử lý",
                text=(
                    f"{DEMO_MARKER} 🔎 Định nghĩa và mô tả công cụ cần trích dẫn nguồn "
                    "theo chuẩn APA trước khi nộp."
                ),
            ),
        ),
        review_paragraphs=[
            ReviewParagraph(
                text="Các phương pháp giảng dạy truyền thống thường gặp phải những hạn chế nhất định...",
                match="Cao (85%)",
                source="⚠️ Cấu trúc rất phổ biến. Cần nêu rõ hạn chế tại trường, có số liệu khảo sát.",
            ),
            ReviewParagraph(
                text="Việc sử dụng tài liệu in ấn đơn thuần đôi khi chưa đủ để tạo môi trường học tập sinh động...",
                match="Trung bình (60%)",
                source="⚠️ Nhận định chung chung, thiếu bằng chứng thực tế.",
            ),
        ],
        upgrade_plan=UpgradePlan(
            short=[
                "📝 [NGAY LẬP TỨC] Sửa các lỗi chính tả đã phát hiện",
                "📊 [1-2 NGÀY] Thêm tiêu đề, đánh số và nguồn cho bảng biểu",
            ],
            medium=[
                f"🔬 [1-2 TUẦN] Mở rộng mẫu nghiên cứu theo yêu cầu {award_goal}",
                "📈 [2 TUẦN] Bổ sung paired t-test và Effect Size (Cohen's d)",
            ],
            long=[
                "🏫 [1-2 THÁNG] Xây dựng quy trình chuẩn để nhân rộng toàn trường",
                "📰 [6-12 THÁNG] Viết bài báo khoa học đăng Tạp chí Giáo dục",
            ],
        ),
        spelling_errors=[
            SpellingError(
                original="họ sinh",
                suggest="học sinh",
                context="...giúp [họ sinh] tiếp thu kiến thức...",
            ),
            SpellingError(
                original="giản dạy",
                suggest="giảng dạy",
                context="...trong quá trình [giản dạy]...",
            ),
            SpellingError(
                original="cở sở", suggest="cơ sở", context="...dựa trên [cở sở] lý luận..."
            ),
            SpellingError(
                original="nghành", suggest="ngành", context="...đổi mới của [nghành] giáo dục..."
            ),
        ],
        demo=True,
    )
